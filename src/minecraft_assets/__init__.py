"""minecraft-assets - Locate, load and resolve Minecraft asset files."""

from minecraft_assets.core import AssetPack
from minecraft_assets.providers import FileSystemResourceProvider, ZippedResourceProvider
from minecraft_assets.resolve import ModelResolver, for_each_parent, load_model_chain
from minecraft_assets.resource import (
    MINECRAFT_NAMESPACE,
    ModelIdentifier,
    ResourceCategory,
    ResourceIdentifier,
    ResourceKind,
    ResourceLocation,
)
from minecraft_assets.types import (
    PackInfo,
    ResourceContent,
    ResourceNotFoundError,
    ResourceProvider,
)

__version__ = "0.1.0.dev0"

__all__ = [
    "MINECRAFT_NAMESPACE",
    "AssetPack",
    "FileSystemResourceProvider",
    "ModelIdentifier",
    "ModelResolver",
    "PackInfo",
    "ResourceCategory",
    "ResourceContent",
    "ResourceIdentifier",
    "ResourceKind",
    "ResourceLocation",
    "ResourceNotFoundError",
    "ResourceProvider",
    "ZippedResourceProvider",
    "for_each_parent",
    "load_model_chain",
]
