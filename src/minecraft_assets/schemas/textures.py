"""Data types for ``textures/**/*.png.mcmeta`` files."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from minecraft_assets.schemas.base import AssetModel


class AnimationFrame(AssetModel):
    index: int = Field(ge=0)
    time: int | None = None
    """Ticks to show this frame; falls back to the animation's frametime."""

    @model_validator(mode="before")
    @classmethod
    def _from_index(cls, data: Any) -> Any:
        # a bare number is shorthand for {"index": n}
        if isinstance(data, int) and not isinstance(data, bool):
            return {"index": data}
        return data


class Animation(AssetModel):
    """Animation settings for a texture stored as a vertical strip of frames."""

    frametime: int = 1
    interpolate: bool = False
    width: int | None = Field(None, ge=1)
    height: int | None = Field(None, ge=1)
    frames: tuple[AnimationFrame, ...] | None = None
    """Explicit frame order; None means every frame in strip order."""

    def frame_size(self, image_width: int, image_height: int) -> tuple[int, int]:
        """Return ``(width, height)`` of one frame for an image of this size.

        Unset dimensions default to the shorter image side, giving square
        frames for the usual vertical strip.
        """
        side = min(image_width, image_height)
        width = self.width if self.width is not None else side
        height = self.height if self.height is not None else side
        return width, height


class TextureOptions(AssetModel):
    blur: bool = False
    clamp: bool = False


class TextureMeta(AssetModel):
    """Metadata stored next to a texture."""

    animation: Animation | None = None
    texture: TextureOptions = Field(default_factory=TextureOptions)

    @property
    def blur(self) -> bool:
        return self.texture.blur

    @property
    def clamp(self) -> bool:
        return self.texture.clamp
