"""Data types for ``blockstates/*.json``.

See <https://minecraft.wiki/w/Tutorials/Models#Block_states>.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import Field, StrictBool, StrictStr, model_validator

from minecraft_assets.schemas.base import AssetModel

StateValue = StrictBool | StrictStr
"""Right-hand side of a condition: ``"side|up"``, ``"true"`` or ``true``."""


class ModelProperties(AssetModel):
    """A model reference plus how to place it for one block state.

    Before 1.13 ``model`` has no ``block/`` prefix; use
    :class:`~minecraft_assets.resource.ModelIdentifier` to compare across
    versions.
    """

    model: str
    x: int = 0
    y: int = 0
    uv_lock: bool = Field(False, alias="uvlock")
    weight: int = 1


class Variant(AssetModel):
    """One or more weighted model choices for a block state.

    In JSON this is either a single model object or an array of them.
    """

    models: tuple[ModelProperties, ...]

    @model_validator(mode="before")
    @classmethod
    def _wrap_models(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"models": data}
        if isinstance(data, dict) and "models" not in data:
            return {"models": [data]}
        return data

    @classmethod
    def single(cls, model: str, **properties: Any) -> Variant:
        return cls(models=(ModelProperties(model=model, **properties),))


class Condition(AssetModel):
    """State requirements that must **all** match."""

    states: dict[str, StateValue]


class WhenClause(AssetModel):
    """A single condition, or an ``OR`` of several."""

    conditions: tuple[Condition, ...]
    is_or: bool = False

    @model_validator(mode="before")
    @classmethod
    def _split_or(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "conditions" in data:
            return data
        if "OR" in data:
            alternatives = data["OR"]
            if not isinstance(alternatives, list):
                raise ValueError(f"'OR' must be an array of conditions, got {alternatives!r}")
            return {"conditions": [{"states": c} for c in alternatives], "is_or": True}
        return {"conditions": [{"states": data}]}


class Case(AssetModel):
    """Apply a variant when the ``when`` clause holds (always, if None)."""

    apply: Variant
    when: WhenClause | None = None


class BlockStates(AssetModel):
    """Block states for one block.

    Exactly one of ``variants`` (state string -> variant, ``""`` or
    ``"normal"`` for single-state blocks) or ``multipart`` is set, matching
    whichever key the file uses. A file with both keys keeps ``variants``.
    """

    variants: dict[str, Variant] | None = None
    multipart: list[Case] | None = None

    @model_validator(mode="before")
    @classmethod
    def _pick_layout(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("variants") is not None:
            return {"variants": data["variants"]}
        if data.get("multipart") is not None:
            return {"multipart": data["multipart"]}
        raise ValueError("Block states must have either 'variants' or 'multipart'")

    @property
    def is_multipart(self) -> bool:
        return self.multipart is not None

    def models(self) -> Iterator[ModelProperties]:
        """Yield every model reference, in file order."""
        if self.variants is not None:
            for variant in self.variants.values():
                yield from variant.models
        for case in self.multipart or ():
            yield from case.apply.models
