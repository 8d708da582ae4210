"""Tests for texture frame rendering."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from minecraft_assets.cli import main
from minecraft_assets.render import AVAILABLE, frame_count, render_texture
from minecraft_assets.schemas import TextureMeta
from minecraft_assets.types import ResourceContent
from tests.conftest import create_test_resource_content

COLORS = [(255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255)]


def make_strip(size: int = 4, frames: int = 3) -> bytes:
    """Build a vertical strip PNG with one solid colour per frame."""
    from PIL import Image

    image = Image.new("RGBA", (size, size * frames))
    for index in range(frames):
        image.paste(COLORS[index % len(COLORS)], (0, index * size, size, (index + 1) * size))
    output = io.BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()


def open_png(data: bytes):
    from PIL import Image

    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def strip_content(**kwargs) -> ResourceContent:
    return create_test_resource_content(make_strip(**kwargs), "image/png")


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_without_meta_returns_whole_image():
    """Test a texture without metadata renders unchanged."""
    rendered = render_texture(strip_content())

    assert rendered.data.startswith(b"\x89PNG")
    assert rendered.content_type == "image/png"
    assert rendered.encoding is None
    assert open_png(rendered.data).size == (4, 12)
    assert rendered.metadata == {"render_frame": 0, "render_width": 4, "render_height": 12}


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_selects_animation_frame():
    """Test the requested frame is cropped out of the strip."""
    meta = TextureMeta.model_validate({"animation": {}})

    rendered = render_texture(strip_content(), meta=meta, frame=1)

    image = open_png(rendered.data).convert("RGBA")
    assert image.size == (4, 4)
    assert image.getpixel((0, 0)) == COLORS[1]
    assert rendered.metadata is not None
    assert rendered.metadata["render_frame"] == 1


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_follows_frame_order_and_wraps():
    """Test explicit frame lists are honoured and the position wraps."""
    meta = TextureMeta.model_validate({"animation": {"frames": [2, {"index": 0, "time": 4}]}})

    first = render_texture(strip_content(), meta=meta, frame=0)
    wrapped = render_texture(strip_content(), meta=meta, frame=3)

    assert open_png(first.data).convert("RGBA").getpixel((0, 0)) == COLORS[2]
    assert open_png(wrapped.data).convert("RGBA").getpixel((0, 0)) == COLORS[0]


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_scale_uses_nearest_neighbour():
    """Test upscaling keeps solid pixels."""
    meta = TextureMeta.model_validate({"animation": {}})

    rendered = render_texture(strip_content(), meta=meta, frame=2, scale=4)

    image = open_png(rendered.data).convert("RGBA")
    assert image.size == (16, 16)
    assert image.getpixel((15, 15)) == COLORS[2]
    assert rendered.metadata is not None
    assert rendered.metadata["render_scale"] == 4


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_preserves_source_metadata():
    """Test the source metadata is carried into the rendered content."""
    source = ResourceContent(
        data=make_strip(),
        content_type="image/png",
        metadata={"location": "minecraft:block/sea_lantern"},
    )
    rendered = render_texture(source)
    assert rendered.metadata is not None
    assert rendered.metadata["location"] == "minecraft:block/sea_lantern"


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_frame_outside_strip():
    """Test frame indices beyond the strip raise ValueError."""
    meta = TextureMeta.model_validate({"animation": {"frames": [7]}})
    with pytest.raises(ValueError, match="outside"):
        render_texture(strip_content(), meta=meta)


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_frame_taller_than_texture():
    """Test a frame height larger than the image raises ValueError."""
    meta = TextureMeta.model_validate({"animation": {"height": 32}})
    content = strip_content(size=16, frames=1)

    with pytest.raises(ValueError, match="does not fit"):
        render_texture(content, meta=meta)
    with pytest.raises(ValueError, match="does not fit"):
        frame_count(content, meta)


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_unvalidated_empty_frame_size():
    """Test zero frame sizes raise ValueError even on unvalidated metadata."""
    from minecraft_assets.schemas import Animation

    meta = TextureMeta.model_construct(animation=Animation.model_construct(width=0))
    content = strip_content(size=16, frames=1)

    with pytest.raises(ValueError, match="must be positive"):
        frame_count(content, meta)
    with pytest.raises(ValueError, match="must be positive"):
        render_texture(content, meta=meta)


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_empty_frame_list():
    """Test an animation with an empty frame list raises ValueError."""
    meta = TextureMeta.model_validate({"animation": {"frames": []}})
    with pytest.raises(ValueError, match="no frames"):
        render_texture(strip_content(), meta=meta)


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_rejects_bad_scale():
    """Test non-positive scales are refused."""
    with pytest.raises(ValueError, match="scale must be a positive integer"):
        render_texture(strip_content(), scale=0)


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_render_rejects_non_png():
    """Test non-PNG content is refused."""
    content = create_test_resource_content("{}", "application/json")
    with pytest.raises(ValueError, match="must be a PNG texture"):
        render_texture(content)


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_frame_count():
    """Test counting frames with and without metadata."""
    content = strip_content()
    assert frame_count(content) == 1
    assert frame_count(content, TextureMeta.model_validate({"animation": {}})) == 3
    assert frame_count(content, TextureMeta.model_validate({"animation": {"frames": [0, 0, 1, 1]}})) == 4


def test_render_raises_import_error_when_pillow_missing():
    """Test render_texture raises ImportError when Pillow is not available."""
    with patch("minecraft_assets.render.AVAILABLE", False):
        with pytest.raises(ImportError, match="minecraft-assets\\[render\\]"):
            render_texture(create_test_resource_content(b"\x89PNG\r\n\x1a\n", "image/png"))


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_cli_render_to_file(asset_root: Path, tmp_path: Path, capsys):
    """Test the render command writes an animation frame to a file."""
    texture = asset_root / "assets/minecraft/textures/block/sea_lantern.png"
    texture.write_bytes(make_strip(size=2))
    output = tmp_path / "frame.png"

    argv = ["--root", str(asset_root), "render", "block/sea_lantern", "-o", str(output)]
    assert main([*argv, "--frame", "2", "--scale", "8"]) == 0

    assert "Saved to:" in capsys.readouterr().err
    image = open_png(output.read_bytes()).convert("RGBA")
    assert image.size == (16, 16)
    assert image.getpixel((0, 0)) == COLORS[2]


@pytest.mark.skipif(not AVAILABLE, reason="Pillow not installed")
def test_cli_render_without_meta_to_stdout(asset_root: Path, capsysbinary):
    """Test rendering a texture with no .mcmeta to stdout."""
    texture = asset_root / "assets/minecraft/textures/block/stone.png"
    texture.write_bytes(make_strip(frames=1))

    assert main(["--root", str(asset_root), "render", "block/stone", "-o", "-"]) == 0

    data = capsysbinary.readouterr().out
    assert data.startswith(b"\x89PNG")
    assert open_png(data).size == (4, 4)
