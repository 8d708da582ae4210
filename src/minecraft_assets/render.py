"""Texture rendering utilities using Pillow.

This module provides optional rendering functionality. It requires the
`render` optional dependency group to be installed:
    pip install minecraft-assets[render]
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from minecraft_assets.types import ResourceContent

if TYPE_CHECKING:
    from minecraft_assets.schemas import Animation, TextureMeta

# Try to import Pillow to determine availability
try:
    import PIL  # noqa: F401

    AVAILABLE = True
except ImportError:
    AVAILABLE = False

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _require_pillow() -> None:
    if not AVAILABLE:
        raise ImportError(
            "Pillow is not installed. Install the render optional dependency: "
            "pip install minecraft-assets[render]"
        )


def _check_png(resource: ResourceContent) -> None:
    if resource.content_type != "image/png" and not resource.data.startswith(PNG_SIGNATURE):
        raise ValueError(
            f"Resource must be a PNG texture (content_type='image/png' or PNG data), "
            f"got content_type='{resource.content_type}'"
        )


def _frame_order(meta: TextureMeta | None, strip_length: int) -> list[int]:
    if meta is None or meta.animation is None or meta.animation.frames is None:
        return list(range(strip_length))
    return [frame.index for frame in meta.animation.frames]


def _frame_grid(animation: Animation, image_size: tuple[int, int]) -> tuple[int, int, int]:
    """Return ``(width, height, columns)`` of the frames in an animated image.

    Raises:
        ValueError: If a frame is empty or larger than the image.
    """
    width, height = animation.frame_size(*image_size)
    if width < 1 or height < 1:
        raise ValueError(f"Frame size must be positive, got {width}x{height}")
    if width > image_size[0] or height > image_size[1]:
        raise ValueError(
            f"Frame size {width}x{height} does not fit a "
            f"{image_size[0]}x{image_size[1]} texture"
        )
    return width, height, image_size[0] // width


def frame_count(resource: ResourceContent, meta: TextureMeta | None = None) -> int:
    """Return how many animation frames a texture shows.

    Textures without animation metadata count as a single frame.
    """
    _require_pillow()
    from PIL import Image

    _check_png(resource)
    if meta is None or meta.animation is None:
        return 1
    with Image.open(io.BytesIO(resource.data)) as image:
        width, height, columns = _frame_grid(meta.animation, image.size)
        strip_length = columns * (image.size[1] // height)
    return len(_frame_order(meta, strip_length))


def render_texture(
    resource: ResourceContent,
    meta: TextureMeta | None = None,
    frame: int = 0,
    scale: int | None = None,
) -> ResourceContent:
    """Extract one frame of a texture and optionally upscale it.

    Args:
        resource: PNG texture content, e.g. from ``AssetPack.load_texture``.
        meta: Texture metadata. Without an ``animation`` section the whole
            image is the frame.
        frame: Position in the animation's frame order (wraps around).
        scale: Optional integer upscale factor, using nearest-neighbour
            sampling so pixel art stays crisp.

    Returns:
        ResourceContent with PNG data and content_type="image/png".

    Raises:
        ImportError: If Pillow is not installed.
        ValueError: If the resource is not a PNG, ``scale`` is not positive,
            the frame size does not fit the image, or the frame lies outside it.
    """
    _require_pillow()

    # Import here to avoid triggering ImportError at module level
    from PIL import Image

    _check_png(resource)
    if scale is not None and scale < 1:
        raise ValueError(f"scale must be a positive integer, got {scale}")

    with Image.open(io.BytesIO(resource.data)) as image:
        image.load()
        rendered = image
        frame_index = 0

        if meta is not None and meta.animation is not None:
            width, height, columns = _frame_grid(meta.animation, image.size)
            strip_length = columns * (image.size[1] // height)
            order = _frame_order(meta, strip_length)
            if not order:
                raise ValueError("Animation lists no frames")
            frame_index = order[frame % len(order)]
            if frame_index >= strip_length:
                raise ValueError(
                    f"Frame {frame_index} is outside a {strip_length}-frame texture"
                )
            left = (frame_index % columns) * width
            top = (frame_index // columns) * height
            rendered = image.crop((left, top, left + width, top + height))

        if scale is not None and scale != 1:
            rendered = rendered.resize(
                (rendered.size[0] * scale, rendered.size[1] * scale),
                Image.Resampling.NEAREST,
            )

        output = io.BytesIO()
        rendered.save(output, format="PNG")
        size = rendered.size

    # Build metadata preserving original with render info
    metadata = dict(resource.metadata) if resource.metadata else {}
    metadata["render_frame"] = frame_index
    metadata["render_width"], metadata["render_height"] = size
    if scale is not None:
        metadata["render_scale"] = scale

    return ResourceContent(
        data=output.getvalue(),
        content_type="image/png",
        encoding=None,  # PNG is binary
        metadata=metadata,
    )
