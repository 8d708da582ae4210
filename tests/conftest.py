"""Pytest configuration and fixtures."""

from __future__ import annotations

import json
import zipfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from minecraft_assets.resource import ResourceIdentifier, ResourceKind, ResourceLocation
from minecraft_assets.schemas import Model
from minecraft_assets.types import ResourceContent, ResourceNotFoundError

FAKE_PNG = b"\x89PNG\r\n\x1a\nnot really an image"

# A small but realistic post-1.13 asset tree, keyed by path relative to the root.
ASSET_FILES: dict[str, Any] = {
    "pack.mcmeta": {"pack": {"pack_format": 15, "description": "Test pack"}},
    "assets/minecraft/blockstates/oak_planks.json": {
        "variants": {"": {"model": "block/oak_planks"}}
    },
    "assets/minecraft/blockstates/stone.json": {
        "variants": {
            "": [
                {"model": "block/stone"},
                {"model": "block/stone_mirrored"},
                {"model": "block/stone", "y": 180},
                {"model": "block/stone_mirrored", "y": 180},
            ]
        }
    },
    "assets/minecraft/blockstates/cobblestone_wall.json": {
        "multipart": [
            {"when": {"up": "true"}, "apply": {"model": "block/cobblestone_wall_post"}},
            {
                "when": {"north": "true"},
                "apply": {"model": "block/cobblestone_wall_side", "uvlock": True},
            },
        ]
    },
    "assets/minecraft/blockstates/broken.json": {"neither": {}},
    "assets/minecraft/models/block/block.json": {
        "gui_light": "side",
        "display": {"gui": {"rotation": [30, 225, 0], "scale": [0.625, 0.625, 0.625]}},
    },
    "assets/minecraft/models/block/cube.json": {
        "parent": "block/block",
        "elements": [
            {
                "from": [0, 0, 0],
                "to": [16, 16, 16],
                "faces": {
                    "down": {"texture": "#down", "cullface": "down"},
                    "up": {"texture": "#up", "cullface": "up"},
                },
            }
        ],
        "textures": {"particle": "#north"},
    },
    "assets/minecraft/models/block/cube_all.json": {
        "parent": "block/cube",
        "textures": {
            "particle": "#all",
            "down": "#all",
            "up": "#all",
            "north": "#all",
        },
    },
    "assets/minecraft/models/block/oak_planks.json": {
        "parent": "minecraft:block/cube_all",
        "textures": {"all": "minecraft:block/oak_planks"},
    },
    "assets/minecraft/models/block/stone.json": {
        "parent": "block/cube_all",
        "textures": {"all": "block/stone"},
    },
    "assets/minecraft/models/block/_template.json": {"parent": "block/cube"},
    "assets/minecraft/models/item/generated.json": {"parent": "builtin/generated"},
    "assets/minecraft/models/item/handheld.json": {
        "parent": "item/generated",
        "display": {"thirdperson_righthand": {"rotation": [0, -90, 55]}},
    },
    "assets/minecraft/models/item/diamond_hoe.json": {
        "parent": "item/handheld",
        "textures": {"layer0": "item/diamond_hoe"},
    },
    "assets/minecraft/models/item/broken_chain.json": {"parent": "item/missing"},
    "assets/minecraft/textures/block/stone.png": FAKE_PNG,
    "assets/minecraft/textures/block/sea_lantern.png": FAKE_PNG,
    "assets/minecraft/textures/block/sea_lantern.png.mcmeta": {
        "animation": {"frametime": 5, "frames": [0, 1, {"index": 2, "time": 10}]}
    },
    "assets/minecraft/textures/item/diamond_hoe.png": FAKE_PNG,
    "assets/mymod/blockstates/widget.json": {"variants": {"": {"model": "mymod:block/widget"}}},
    "assets/mymod/models/block/widget.json": {
        "parent": "minecraft:block/cube_all",
        "textures": {"all": "mymod:block/widget"},
    },
}


def _encode(content: Any) -> bytes:
    if isinstance(content, bytes):
        return content
    return json.dumps(content).encode("utf-8")


@pytest.fixture
def asset_root(tmp_path: Path) -> Path:
    """Write ASSET_FILES to a temporary directory and return its path."""
    root = tmp_path / "pack"
    for relative, content in ASSET_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(_encode(content))
    return root


@pytest.fixture
def asset_zip(tmp_path: Path) -> Path:
    """Write ASSET_FILES into a zipped resource pack and return its path."""
    archive = tmp_path / "pack.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for relative, content in ASSET_FILES.items():
            zf.writestr(relative, _encode(content))
    return archive


class MockResourceProvider:
    """In-memory ResourceProvider for testing."""

    def __init__(self, files: dict[str, Any]) -> None:
        """Initialize mock provider.

        Args:
            files: Mapping of relative file path to bytes or JSON-able content.
        """
        self.files = {path: _encode(content) for path, content in files.items()}
        self.loaded: list[ResourceLocation] = []

    def load_resource(self, location: ResourceLocation) -> bytes:
        """Return file content, recording the request."""
        self.loaded.append(location)
        if location.file_path not in self.files:
            raise ResourceNotFoundError(location)
        return self.files[location.file_path]

    def enumerate_resources(
        self, namespace: str, kind: ResourceKind
    ) -> Iterator[ResourceIdentifier]:
        """List identifiers under the kind's directory, skipping '_' names."""
        prefix = f"{kind.directory_in(namespace)}/"
        suffix = f".{kind.extension}"
        for path in sorted(self.files):
            if not (path.startswith(prefix) and path.endswith(suffix)):
                continue
            relative = path[len(prefix) : -len(suffix)]
            if any(part.startswith("_") for part in relative.split("/")):
                continue
            yield ResourceIdentifier(relative)


@pytest.fixture
def mock_provider() -> MockResourceProvider:
    """Create a MockResourceProvider holding ASSET_FILES."""
    return MockResourceProvider(ASSET_FILES)


def make_loader(models: dict[str, dict[str, Any]]):
    """Build a model loader over ``{file_path: model JSON}`` that records calls.

    Returns:
        Tuple of (loader function, list of requested locations).
    """
    requested: list[ResourceLocation] = []

    def load(location: ResourceLocation) -> Model:
        requested.append(location)
        if location.file_path not in models:
            raise ResourceNotFoundError(location)
        return Model.model_validate(models[location.file_path])

    return load, requested


def create_test_resource_content(
    data: bytes | str = b"test data",
    content_type: str = "application/octet-stream",
    encoding: str | None = None,
) -> ResourceContent:
    """Create a test ResourceContent object.

    Args:
        data: Resource data (bytes or string).
        content_type: MIME type.
        encoding: Encoding for text resources.

    Returns:
        ResourceContent object.
    """
    if isinstance(data, str):
        if encoding is None:
            encoding = "utf-8"
        data_bytes = data.encode(encoding)
    else:
        data_bytes = data

    return ResourceContent(
        data=data_bytes,
        content_type=content_type,
        encoding=encoding,
    )
