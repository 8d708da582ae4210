"""Asset pack facade: load and resolve assets through a resource provider."""

from __future__ import annotations

import logging
import os
import zipfile
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from minecraft_assets.providers import FileSystemResourceProvider, ZippedResourceProvider
from minecraft_assets.resolve import ModelResolver, load_model_chain
from minecraft_assets.resource import (
    MINECRAFT_NAMESPACE,
    ResourceIdentifier,
    ResourceKind,
    ResourceLocation,
)
from minecraft_assets.schemas import BlockStates, Model, Textures, TextureMeta
from minecraft_assets.types import ResourceContent

if TYPE_CHECKING:
    from minecraft_assets.types import ResourceProvider

logger = logging.getLogger(__name__)

ROOT_ENV_VAR = "MINECRAFT_ASSETS_ROOT"

_DECODERS: dict[ResourceKind, Any] = {
    ResourceKind.BLOCKSTATES: BlockStates.model_validate_json,
    ResourceKind.BLOCK_MODEL: Model.model_validate_json,
    ResourceKind.ITEM_MODEL: Model.model_validate_json,
    ResourceKind.TEXTURE_META: TextureMeta.model_validate_json,
}


def resolve_root(root: str | os.PathLike[str] | None = None) -> Path:
    """Pick the asset root from the argument, the environment, or the cwd.

    The constructor argument takes precedence over the
    ``MINECRAFT_ASSETS_ROOT`` environment variable.
    """
    if root is not None:
        return Path(root).expanduser()

    env_root = os.environ.get(ROOT_ENV_VAR, "").strip()
    if env_root:
        return Path(env_root).expanduser()

    return Path.cwd()


class AssetPack:
    """Reads Minecraft assets from a single resource provider.

    Every ``load_*`` method computes a :class:`ResourceLocation`, fetches the
    bytes from the provider and decodes them. Lookup and decode errors
    propagate as raised by the provider or decoder.

    Example:
        >>> assets = AssetPack.at_path("~/.minecraft/versions/1.20/extracted")
        >>> states = assets.load_blockstates("oak_planks")  # doctest: +SKIP
        >>> assets.resolve_block_model_textures("block/cube_all")  # doctest: +SKIP
    """

    def __init__(self, provider: ResourceProvider) -> None:
        self.provider = provider

    @classmethod
    def at_path(cls, root: str | os.PathLike[str] | None = None) -> AssetPack:
        """Open an asset tree directory or a zipped resource pack.

        Args:
            root: Directory containing ``assets/`` or a ``.zip`` pack. Falls
                back to ``MINECRAFT_ASSETS_ROOT`` and then the current
                directory.
        """
        path = resolve_root(root)
        if path.is_file() and zipfile.is_zipfile(path):
            logger.debug("Opening zipped resource pack %s", path)
            return cls(ZippedResourceProvider(path))
        logger.debug("Opening asset directory %s", path)
        return cls(FileSystemResourceProvider(path))

    def load_resource(self, location: ResourceLocation) -> Any:
        """Load and decode the resource at ``location``.

        Textures are returned as :class:`ResourceContent`; every other kind
        is decoded into its schema type.
        """
        data = self.provider.load_resource(location)
        if location.kind is ResourceKind.TEXTURE:
            return ResourceContent(
                data=data,
                content_type="image/png",
                metadata={"location": str(location), "path": location.file_path},
            )
        return _DECODERS[location.kind](data)

    def load_resource_at_path(self, path: str | os.PathLike[str], kind: ResourceKind) -> Any:
        """Decode a file given its full path, bypassing the provider."""
        data = Path(path).read_bytes()
        if kind is ResourceKind.TEXTURE:
            return ResourceContent(data=data, content_type="image/png")
        return _DECODERS[kind](data)

    def load_blockstates(self, block_id: str | ResourceIdentifier) -> BlockStates:
        """Load the block states of the block with the given id."""
        return self.load_resource(ResourceLocation.blockstates(block_id))

    def load_block_model(self, model: str | ResourceIdentifier) -> Model:
        """Load a block model; ``"cube_all"`` and ``"block/cube_all"`` are equivalent."""
        return self.load_resource(ResourceLocation.block_model(model))

    def load_item_model(self, model: str | ResourceIdentifier) -> Model:
        """Load an item model; ``"compass"`` and ``"item/compass"`` are equivalent."""
        return self.load_resource(ResourceLocation.item_model(model))

    def load_block_model_recursive(self, model: str | ResourceIdentifier) -> list[Model]:
        """Load a block model and all of its ancestors.

        Returns:
            The requested model first, then its parent, up to the root.
        """
        return load_model_chain(ResourceLocation.block_model(model), self.load_resource)

    def load_item_model_recursive(self, model: str | ResourceIdentifier) -> list[Model]:
        """Load an item model and all of its ancestors, child first."""
        return load_model_chain(ResourceLocation.item_model(model), self.load_resource)

    def resolve_block_model_textures(self, model: str | ResourceIdentifier) -> Textures:
        """Resolve the texture variables of a block model against its parents."""
        return ModelResolver.resolve_model_textures(
            ResourceLocation.block_model(model), self.load_resource
        )

    def resolve_item_model_textures(self, model: str | ResourceIdentifier) -> Textures:
        """Resolve the texture variables of an item model against its parents."""
        return ModelResolver.resolve_model_textures(
            ResourceLocation.item_model(model), self.load_resource
        )

    def load_texture(self, path: str | ResourceIdentifier) -> ResourceContent:
        """Load the PNG bytes of a texture, e.g. ``"block/stone"``."""
        return self.load_resource(ResourceLocation.texture(path))

    def load_texture_meta(self, path: str | ResourceIdentifier) -> TextureMeta:
        """Load the ``.png.mcmeta`` file next to the texture at ``path``."""
        identifier = ResourceIdentifier(path)
        return self.load_resource(
            ResourceLocation.texture_meta(f"{identifier.as_str()}.png")
        )

    def enumerate(
        self, kind: ResourceKind, namespace: str = MINECRAFT_NAMESPACE
    ) -> Iterator[ResourceLocation]:
        """Yield a location for every resource of ``kind`` in ``namespace``.

        Model locations carry the ``block/`` or ``item/`` prefix so that
        models in sub-directories keep their full name.
        """
        prefix = f"{namespace}:" if namespace != MINECRAFT_NAMESPACE else ""
        if kind.is_model:
            prefix += kind.directory.rpartition("/")[2] + "/"
        for identifier in self.provider.enumerate_resources(namespace, kind):
            yield ResourceLocation(f"{prefix}{identifier.as_str()}", kind)
