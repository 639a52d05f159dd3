"""Port for reading and writing resources on a control plane."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from kumarecon.domain.catalog import ResourceTypeEntry


@dataclass(slots=True, frozen=True)
class CatalogSnapshot:
    """Server identification plus the resource types it serves."""

    product: str
    version: str
    entries: tuple[ResourceTypeEntry, ...]


class ResourceAPI(Protocol):
    """Keyed access to resources living under ``/meshes/{mesh}/{path}/{name}``.

    Implementations raise ``TransportError`` for anything other than the
    documented outcomes. ``fetch`` returns ``None`` when the resource does not
    exist.
    """

    def heartbeat_and_catalog(self) -> CatalogSnapshot: ...

    def fetch(self, mesh: str, path_segment: str, name: str) -> bytes | None: ...

    def put(self, mesh: str, path_segment: str, name: str, body: str) -> None: ...

    def delete(self, mesh: str, path_segment: str, name: str) -> None: ...


__all__ = ["CatalogSnapshot", "ResourceAPI"]
