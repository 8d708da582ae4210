"""Data types for the JSON files found in an asset tree.

Every record is a pydantic model: decode a file with
``Model.model_validate_json(data)``. Malformed input raises
``pydantic.ValidationError``, a subclass of ``ValueError``.
"""

from minecraft_assets.schemas.base import AssetModel
from minecraft_assets.schemas.blockstates import (
    BlockStates,
    Case,
    Condition,
    ModelProperties,
    Variant,
    WhenClause,
)
from minecraft_assets.schemas.models import (
    Element,
    ElementFace,
    ElementRotation,
    ItemOverride,
    Model,
    Texture,
    Textures,
    Transform,
)
from minecraft_assets.schemas.textures import (
    Animation,
    AnimationFrame,
    TextureMeta,
    TextureOptions,
)

__all__ = [
    "Animation",
    "AnimationFrame",
    "AssetModel",
    "BlockStates",
    "Case",
    "Condition",
    "Element",
    "ElementFace",
    "ElementRotation",
    "ItemOverride",
    "Model",
    "ModelProperties",
    "Texture",
    "TextureMeta",
    "TextureOptions",
    "Textures",
    "Transform",
    "Variant",
    "WhenClause",
]
