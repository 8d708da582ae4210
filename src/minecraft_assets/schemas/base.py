"""Base class for records decoded from asset JSON files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AssetModel(BaseModel):
    """Immutable record read from a Minecraft JSON file.

    Unknown keys are ignored so files written for newer game versions still
    decode. Fields whose JSON key is not a valid Python name carry an alias and
    can be set by either name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)
