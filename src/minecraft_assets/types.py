"""Core type definitions shared by providers and the asset pack facade."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from minecraft_assets.resource import (
        ResourceIdentifier,
        ResourceKind,
        ResourceLocation,
    )


class ResourceNotFoundError(ValueError):
    """Raised when a provider has no file for a resource location.

    Subclasses ValueError so callers that treat any lookup or decode problem
    as "bad resource" can catch both with one clause.
    """

    def __init__(self, location: ResourceLocation, detail: str = "") -> None:
        self.location = location
        message = f"Resource {location!r} not found at '{location.file_path}'."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class ResourceProvider(Protocol):
    """Protocol that every source of asset files must implement.

    A provider maps :class:`ResourceLocation` objects to raw bytes. It is
    free to be backed by a directory, an archive, or anything else; the model
    resolver never touches storage directly.
    """

    def load_resource(self, location: ResourceLocation) -> bytes:
        """Return the raw bytes of the resource at ``location``.

        Raises:
            ResourceNotFoundError: If the resource does not exist.
        """
        ...

    def enumerate_resources(
        self, namespace: str, kind: ResourceKind
    ) -> Iterator[ResourceIdentifier]:
        """Yield identifiers of every resource of ``kind`` in ``namespace``.

        Identifiers are relative to the kind's directory and carry no
        extension (e.g. ``block/stone`` for ``textures/block/stone.png``).
        """
        ...


@dataclass(frozen=True, slots=True)
class ResourceContent:
    """Raw content returned for a resource."""

    data: bytes
    """Raw resource bytes (JSON as UTF-8 bytes, PNG as-is)."""

    content_type: str
    """MIME type: 'application/json', 'image/png', etc."""

    encoding: str | None = None
    """Encoding for text-based resources (e.g., 'utf-8'), None for binary."""

    metadata: dict[str, Any] | None = None
    """Optional descriptive details (location, dimensions, frame, etc.)."""

    @property
    def text(self) -> str:
        """Decode data as text.

        Raises:
            ValueError: If encoding is None or decoding fails.
        """
        if self.encoding is None:
            raise ValueError("Cannot decode binary resource as text (encoding is None)")
        return self.data.decode(self.encoding)


@dataclass(frozen=True, slots=True)
class PackInfo:
    """Metadata describing a resource pack, read from its ``pack.mcmeta``."""

    description: str
    """Human-readable description of the pack."""

    pack_format: int | None = None
    """Pack format number declared by the pack, if any."""

    source: str | None = None
    """Where the pack was loaded from (directory or archive path)."""
