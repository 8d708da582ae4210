"""Data types for ``models/block/*.json`` and ``models/item/*.json``.

See <https://minecraft.wiki/w/Tutorials/Models#Block_models>.
"""

from __future__ import annotations

from collections.abc import ItemsView, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import Field, GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from minecraft_assets.resource import ResourceIdentifier
from minecraft_assets.schemas.base import AssetModel

REFERENCE_PREFIX = "#"

Vector = tuple[float, ...]


@dataclass(frozen=True, slots=True)
class Texture:
    """The value of a texture variable.

    Either a concrete texture location (``"block/stone"``) or a reference to
    another variable in the same map (``"#all"``).
    """

    value: str

    @property
    def reference(self) -> str | None:
        """Name of the referenced variable, or None for a concrete location."""
        if self.value.startswith(REFERENCE_PREFIX):
            return self.value[len(REFERENCE_PREFIX) :]
        return None

    @property
    def location(self) -> ResourceIdentifier | None:
        """Texture identifier, or None if this is a variable reference."""
        if self.reference is not None:
            return None
        return ResourceIdentifier(self.value)

    def __str__(self) -> str:
        return self.value


class Textures:
    """Mapping from texture variable name to :class:`Texture`.

    Texture variables let a parent model (``block/cube_all``) use placeholders
    such as ``#all`` that a child fills in. :meth:`resolve` and :meth:`merge`
    are the two primitives used to fold a chain of these maps together.

    Decodes from a JSON object of strings when used as a model field.
    """

    __slots__ = ("variables",)

    def __init__(self, variables: Mapping[str, Texture | str] | None = None) -> None:
        self.variables: dict[str, Texture] = {
            name: value if isinstance(value, Texture) else Texture(value)
            for name, value in (variables or {}).items()
        }

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        from_mapping = core_schema.no_info_after_validator_function(
            cls, handler.generate_schema(dict[str, str])
        )
        return core_schema.json_or_python_schema(
            json_schema=from_mapping,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_mapping]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda textures: textures.to_dict()
            ),
        )

    def to_dict(self) -> dict[str, str]:
        return {name: texture.value for name, texture in self.variables.items()}

    def copy(self) -> Textures:
        return Textures(self.variables)

    def resolve(self, other: Textures) -> None:
        """Substitute references whose target variable is defined in ``other``.

        A single pass: a substituted value that is itself a reference is not
        followed further.
        """
        for name, texture in list(self.variables.items()):
            target = texture.reference
            if target is not None and target in other.variables:
                self.variables[name] = other.variables[target]

    def merge(self, other: Textures) -> None:
        """Add variables from ``other`` that are not already defined here."""
        for name, texture in other.variables.items():
            self.variables.setdefault(name, texture)

    def __getitem__(self, name: str) -> Texture:
        return self.variables[name]

    def get(self, name: str) -> Texture | None:
        return self.variables.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.variables

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)

    def items(self) -> ItemsView[str, Texture]:
        return self.variables.items()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Textures):
            return NotImplemented
        return self.variables == other.variables

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Textures({self.to_dict()!r})"


class Transform(AssetModel):
    """Placement of a model in one display context (``gui``, ``head``...)."""

    rotation: Vector = (0, 0, 0)
    translation: Vector = (0, 0, 0)
    scale: Vector = (1, 1, 1)


class ElementRotation(AssetModel):
    origin: Vector
    axis: str
    angle: float
    rescale: bool = False


class ElementFace(AssetModel):
    """One face of an element.

    ``texture`` is normally a ``#variable`` reference into the model's
    texture map.
    """

    texture: str
    uv: Vector | None = None
    cullface: str | None = None
    rotation: int = 0
    tint_index: int | None = Field(None, alias="tintindex")


class Element(AssetModel):
    """An axis-aligned cuboid making up part of a block model."""

    from_: Vector = Field(alias="from")
    to: Vector
    faces: dict[str, ElementFace] = Field(default_factory=dict)
    rotation: ElementRotation | None = None
    shade: bool = True


class ItemOverride(AssetModel):
    """Swap to another item model when all predicates match."""

    model: str
    predicate: dict[str, float] = Field(default_factory=dict)


class Model(AssetModel):
    """A block or item model.

    Only ``parent`` and ``textures`` take part in inheritance resolution; the
    other fields are carried through as decoded.
    """

    parent: str | None = None
    """Identifier of the parent model, of the same kind as this one."""

    textures: Textures | None = None
    """Texture variables declared by this model."""

    ambient_occlusion: bool | None = Field(None, alias="ambientocclusion")
    """Whether to use ambient occlusion."""

    display: dict[str, Transform] | None = None
    """Per-context display transforms."""

    elements: list[Element] | None = None
    """Geometry of the model. Replaces, rather than extends, the parent's."""

    gui_light: str | None = None
    """``front`` or ``side`` lighting for inventory rendering."""

    overrides: list[ItemOverride] | None = None
    """Item model overrides."""
