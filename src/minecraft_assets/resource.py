"""Namespaced resource identifiers and the locations derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MINECRAFT_NAMESPACE = "minecraft"
"""Namespace implied by identifiers that do not name one explicitly."""

BUILTIN_PREFIX = "builtin"


class ResourceIdentifier:
    """A namespaced identifier for an undetermined type of resource.

    A resource identifier has the form ``"namespace:path"``. If the
    ``namespace`` portion is left out, ``"minecraft"`` is implied.

    Equality and hashing use the literal string, so ``"stone"`` and
    ``"minecraft:stone"`` only compare equal once both are canonical.

    Examples:
        >>> ResourceIdentifier("foo:bar").namespace
        'foo'
        >>> ResourceIdentifier("bar").namespace
        'minecraft'
        >>> ResourceIdentifier(":bar").namespace
        ''
    """

    __slots__ = ("_id",)

    def __init__(self, value: str | ResourceIdentifier) -> None:
        if isinstance(value, ResourceIdentifier):
            value = value.as_str()
        self._id = value

    def as_str(self) -> str:
        """Return the identifier exactly as it was given."""
        return self._id

    @property
    def has_namespace(self) -> bool:
        """Whether the identifier includes an explicit namespace."""
        return ":" in self._id

    @property
    def namespace(self) -> str:
        """Namespace portion, or the default namespace if none is given."""
        namespace, sep, _ = self._id.partition(":")
        return namespace if sep else MINECRAFT_NAMESPACE

    @property
    def path(self) -> str:
        """Path portion (everything after the first colon)."""
        head, sep, tail = self._id.partition(":")
        return tail if sep else head

    def to_canonical(self) -> ResourceIdentifier:
        """Return an identifier that always carries an explicit namespace.

        Identifiers that already have a namespace are returned as-is (the
        same object); otherwise the default namespace is prepended.
        """
        if self.has_namespace:
            return self
        return type(self)(f"{MINECRAFT_NAMESPACE}:{self._id}")

    def to_owned(self) -> ResourceIdentifier:
        """Return an independent copy, safe to store or hand to another thread."""
        return type(self)(self._id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceIdentifier):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        if self.has_namespace:
            return self._id
        return f"{MINECRAFT_NAMESPACE}:{self._id}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._id!r})"


class ModelIdentifier(ResourceIdentifier):
    """An identifier for a block or item model.

    Prior to 1.13, model references in ``blockstates/*.json`` did not carry a
    ``block/`` or ``item/`` prefix. Callers therefore always say which kind of
    model they want (see :class:`ResourceKind`) and this class strips the
    leading path segment so both naming schemes map to the same file.

    Examples:
        >>> ModelIdentifier("stone").model_name
        'stone'
        >>> ModelIdentifier("foo:block/oak_planks").model_name
        'oak_planks'
        >>> ModelIdentifier("builtin/generated").is_builtin
        True
    """

    __slots__ = ()

    @property
    def model_name(self) -> str:
        """Model name with any single leading path segment removed."""
        return self.model_name_of(self.path)

    @property
    def is_builtin(self) -> bool:
        """Whether this names a built-in model with no backing file."""
        return self.is_builtin_path(self.path)

    @staticmethod
    def model_name_of(path: str) -> str:
        _, sep, tail = path.partition("/")
        return tail if sep else path

    @staticmethod
    def is_builtin_path(path: str) -> bool:
        prefix, sep, _ = path.partition("/")
        return bool(sep) and prefix == BUILTIN_PREFIX


class ResourceCategory(Enum):
    """Top-level directory a resource lives under.

    ``ASSETS`` holds client resources; ``DATA`` holds data pack resources.
    """

    ASSETS = "assets"
    DATA = "data"

    @property
    def directory(self) -> str:
        return self.value


class ResourceKind(Enum):
    """The kinds of resource that can be located.

    Each kind maps to a fixed category, sub-directory, file extension and the
    label used in reprs (e.g. ``BlockModel``).
    ``TEXTURE`` and ``TEXTURE_META`` share a directory and differ only by
    extension.
    """

    BLOCKSTATES = ("blockstates", "json", "BlockStates")
    BLOCK_MODEL = ("models/block", "json", "BlockModel")
    ITEM_MODEL = ("models/item", "json", "ItemModel")
    TEXTURE = ("textures", "png", "Texture")
    TEXTURE_META = ("textures", "mcmeta", "TextureMeta")

    def __init__(self, directory: str, extension: str, label: str) -> None:
        self.directory = directory
        self.extension = extension
        self.label = label

    @property
    def category(self) -> ResourceCategory:
        # every kind handled so far lives under assets/
        return ResourceCategory.ASSETS

    def directory_in(self, namespace: str) -> str:
        """Directory holding this kind of resource for ``namespace``."""
        return f"{self.category.directory}/{namespace}/{self.directory}"

    @property
    def is_model(self) -> bool:
        return self in (ResourceKind.BLOCK_MODEL, ResourceKind.ITEM_MODEL)


@dataclass(frozen=True, slots=True)
class ResourceLocation:
    """A resource identifier paired with the kind of resource it names.

    The location knows where the resource's file lives relative to the root
    of an asset tree::

        <category>/<namespace>/<kind directory>/<name>.<extension>

    For model kinds the ``block/`` or ``item/`` prefix is dropped from the
    name, so ``block_model("cube_all")`` and ``block_model("block/cube_all")``
    point at the same file.
    """

    identifier: ResourceIdentifier
    """Identifier of the resource, as given."""

    kind: ResourceKind
    """Kind of resource referenced."""

    def __init__(
        self, identifier: str | ResourceIdentifier, kind: ResourceKind
    ) -> None:
        if not isinstance(identifier, ResourceIdentifier):
            identifier = ResourceIdentifier(identifier)
        object.__setattr__(self, "identifier", identifier)
        object.__setattr__(self, "kind", kind)

    @classmethod
    def blockstates(cls, block_id: str | ResourceIdentifier) -> ResourceLocation:
        return cls(block_id, ResourceKind.BLOCKSTATES)

    @classmethod
    def block_model(cls, model: str | ResourceIdentifier) -> ResourceLocation:
        return cls(model, ResourceKind.BLOCK_MODEL)

    @classmethod
    def item_model(cls, model: str | ResourceIdentifier) -> ResourceLocation:
        return cls(model, ResourceKind.ITEM_MODEL)

    @classmethod
    def texture(cls, path: str | ResourceIdentifier) -> ResourceLocation:
        return cls(path, ResourceKind.TEXTURE)

    @classmethod
    def texture_meta(cls, path: str | ResourceIdentifier) -> ResourceLocation:
        return cls(path, ResourceKind.TEXTURE_META)

    def as_str(self) -> str:
        return self.identifier.as_str()

    @property
    def has_namespace(self) -> bool:
        return self.identifier.has_namespace

    @property
    def namespace(self) -> str:
        return self.identifier.namespace

    @property
    def is_model(self) -> bool:
        return self.kind.is_model

    @property
    def name(self) -> str:
        """Resource name, without the model-type prefix for model kinds."""
        path = self.identifier.path
        if self.is_model:
            return ModelIdentifier.model_name_of(path)
        return path

    @property
    def is_builtin(self) -> bool:
        """True if no file backs this location (e.g. ``builtin/generated``)."""
        if self.is_model:
            return ModelIdentifier.is_builtin_path(self.identifier.path)
        return False

    @property
    def directory(self) -> str:
        """Directory holding the resource, relative to the asset root."""
        return self.kind.directory_in(self.namespace)

    @property
    def file_path(self) -> str:
        """Path of the resource's file, relative to the asset root."""
        return f"{self.directory}/{self.name}.{self.kind.extension}"

    def to_canonical(self) -> ResourceLocation:
        """Return a location whose identifier has an explicit namespace."""
        if self.has_namespace:
            return self
        return ResourceLocation(self.identifier.to_canonical(), self.kind)

    def to_owned(self) -> ResourceLocation:
        return ResourceLocation(self.identifier.to_owned(), self.kind)

    def __str__(self) -> str:
        return str(self.identifier)

    def __repr__(self) -> str:
        return f"{self.kind.label}({self.as_str()!r})"
