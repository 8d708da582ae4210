"""Resource providers backed by a directory tree or a zipped resource pack."""

from __future__ import annotations

import json
import logging
import os
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from importlib.resources import files
from pathlib import Path, PurePosixPath
from typing import Any

from minecraft_assets.resource import ResourceIdentifier, ResourceKind, ResourceLocation
from minecraft_assets.types import PackInfo, ResourceNotFoundError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "pack.mcmeta"


def _is_hidden(relative: PurePosixPath) -> bool:
    # files and directories starting with "_" are ignored by enumeration
    return any(part.startswith("_") for part in relative.parts)


def _identifier_for(relative: PurePosixPath, kind: ResourceKind) -> ResourceIdentifier | None:
    suffix = f".{kind.extension}"
    name = relative.as_posix()
    if not name.endswith(suffix):
        return None
    return ResourceIdentifier(name[: -len(suffix)])


def _suggest(name: str, available: list[str]) -> str:
    stem = PurePosixPath(name).stem.lower()
    suggestions = [n for n in available if stem and stem in n.lower()][:5]
    return f"Similar names: {', '.join(suggestions)}" if suggestions else ""


def _parse_manifest(raw: bytes | None, source: str) -> tuple[dict[str, Any], PackInfo]:
    manifest: dict[str, Any] = {}
    if raw is not None:
        try:
            parsed = json.loads(raw)
            if isinstance(parsed, dict):
                manifest = parsed
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Ignoring malformed %s in %s", MANIFEST_NAME, source)

    pack_data = manifest.get("pack", {})
    if not isinstance(pack_data, dict):
        pack_data = {}
    description = pack_data.get("description", "Resource pack")
    if not isinstance(description, str):
        # text components are allowed here; keep the raw JSON readable
        description = json.dumps(description)
    return manifest, PackInfo(
        description=description,
        pack_format=pack_data.get("pack_format"),
        source=source,
    )


class FileSystemResourceProvider:
    """Provides resources from a directory containing ``assets/``.

    This is the layout of an unpacked resource pack or of the game's own
    extracted assets.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        """Initialize the provider.

        Args:
            root: Directory that contains the ``assets/`` (and optionally
                ``data/``) directory.
        """
        self.root = Path(root)
        self._manifest: dict[str, Any] | None = None
        self._pack_info: PackInfo | None = None

    def resource_path(self, location: ResourceLocation) -> Path:
        """Return the full path the resource at ``location`` would be read from."""
        return self.root / location.file_path

    def load_resource(self, location: ResourceLocation) -> bytes:
        """Read the raw bytes of a resource.

        Raises:
            ResourceNotFoundError: If the file does not exist.
        """
        path = self.resource_path(location)
        logger.debug("Reading %s", path)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            directory = self.root / location.directory
            available = (
                sorted(p.name for p in directory.iterdir()) if directory.is_dir() else []
            )
            raise ResourceNotFoundError(
                location, _suggest(location.name, available)
            ) from None

    def enumerate_resources(
        self, namespace: str, kind: ResourceKind
    ) -> Iterator[ResourceIdentifier]:
        """Yield identifiers for every file of ``kind`` in ``namespace``.

        Sub-directories are walked recursively; anything whose name starts
        with ``_`` is skipped.
        """
        directory = self.root / kind.directory_in(namespace)
        logger.debug("Enumerating %s", directory)
        if not directory.is_dir():
            return

        found: list[ResourceIdentifier] = []
        for path in directory.rglob("*"):
            if not path.is_file():
                continue
            relative = PurePosixPath(path.relative_to(directory).as_posix())
            if _is_hidden(relative):
                continue
            identifier = _identifier_for(relative, kind)
            if identifier is not None:
                found.append(identifier)

        yield from sorted(found, key=ResourceIdentifier.as_str)

    def get_manifest(self) -> dict[str, Any]:
        """Get the parsed ``pack.mcmeta``, or an empty dict if there is none."""
        if self._manifest is None:
            path = self.root / MANIFEST_NAME
            raw = path.read_bytes() if path.is_file() else None
            self._manifest, self._pack_info = _parse_manifest(raw, str(self.root))
        return self._manifest

    def get_pack_info(self) -> PackInfo:
        """Return metadata describing this pack."""
        self.get_manifest()
        assert self._pack_info is not None
        return self._pack_info


class ZippedResourceProvider:
    """Provides resources from a zipped resource pack.

    The archive is opened for each read; its member list is read once and
    cached. The pack's ``pack.mcmeta`` manifest is optional.
    """

    def __init__(
        self,
        archive: str | os.PathLike[str] | Any,
        manifest_name: str = MANIFEST_NAME,
    ) -> None:
        """Initialize the provider.

        Args:
            archive: Path to the ``.zip`` file, or any traversable that
                ``zipfile.ZipFile`` can open (e.g. from ``importlib.resources``).
            manifest_name: Name of the manifest at the archive root.
        """
        self._archive = archive
        self._manifest_name = manifest_name
        self._manifest: dict[str, Any] | None = None
        self._pack_info: PackInfo | None = None
        self._member_list: list[str] | None = None

    @classmethod
    def from_package(
        cls, package_name: str, archive_name: str = "resources.zip"
    ) -> ZippedResourceProvider:
        """Provider for a resource pack zip shipped inside a Python package."""
        return cls(files(package_name) / archive_name)

    @contextmanager
    def _open_zip(self):
        """Context manager for opening the archive.

        Yields:
            ZipFile instance for reading resources.
        """
        if isinstance(self._archive, (str, os.PathLike)):
            with zipfile.ZipFile(self._archive, "r") as zip_file:
                yield zip_file
        else:
            with self._archive.open("rb") as handle, zipfile.ZipFile(handle, "r") as zip_file:
                yield zip_file

    def _get_member_list(self) -> list[str]:
        """Get the cached, sorted list of file members in the archive."""
        if self._member_list is None:
            with self._open_zip() as zip_file:
                self._member_list = sorted(
                    name for name in zip_file.namelist() if not name.endswith("/")
                )
        return self._member_list

    def get_manifest(self) -> dict[str, Any]:
        """Get the parsed manifest, or an empty dict if it is missing or invalid."""
        if self._manifest is None:
            raw: bytes | None = None
            with self._open_zip() as zip_file:
                try:
                    raw = zip_file.read(self._manifest_name)
                except KeyError:
                    raw = None
            self._manifest, self._pack_info = _parse_manifest(raw, str(self._archive))
        return self._manifest

    def get_pack_info(self) -> PackInfo:
        """Return metadata describing this pack."""
        self.get_manifest()
        assert self._pack_info is not None
        return self._pack_info

    def load_resource(self, location: ResourceLocation) -> bytes:
        """Read the raw bytes of a resource from the archive.

        Raises:
            ResourceNotFoundError: If the archive has no such member.
        """
        member = location.file_path
        logger.debug("Reading %s from %s", member, self._archive)
        try:
            with self._open_zip() as zip_file:
                return zip_file.read(member)
        except KeyError:
            prefix = f"{location.directory}/"
            available = [
                name[len(prefix) :]
                for name in self._get_member_list()
                if name.startswith(prefix)
            ]
            raise ResourceNotFoundError(
                location, _suggest(location.name, available)
            ) from None

    def enumerate_resources(
        self, namespace: str, kind: ResourceKind
    ) -> Iterator[ResourceIdentifier]:
        """Yield identifiers for every member of ``kind`` in ``namespace``."""
        prefix = f"{kind.directory_in(namespace)}/"
        logger.debug("Enumerating %s in %s", prefix, self._archive)
        for name in self._get_member_list():
            if not name.startswith(prefix):
                continue
            relative = PurePosixPath(name[len(prefix) :])
            if _is_hidden(relative):
                continue
            identifier = _identifier_for(relative, kind)
            if identifier is not None:
                yield identifier
