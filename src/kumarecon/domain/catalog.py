"""Catalog of resource types served by the control plane.

The catalog is fetched once through the resource port and then passed
explicitly to whatever needs it. It is never refreshed in place; a caller that
wants a newer view loads a new catalog.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import MalformedCatalogError, TransportError, UnreachableError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from .ports.resources import ResourceAPI

log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ResourceTypeEntry:
    logical_name: str
    path_segment: str
    read_only: bool = False
    is_policy: bool = True


@dataclass(slots=True, frozen=True)
class MetadataCatalog:
    """Immutable mapping between logical type names and API path segments."""

    entries: tuple[ResourceTypeEntry, ...] = field(default_factory=tuple)
    product: str = ""
    version: str = ""

    def __post_init__(self) -> None:
        for label, values in (
            ("logical name", (entry.logical_name for entry in self.entries)),
            ("path segment", (entry.path_segment for entry in self.entries)),
        ):
            duplicates = sorted(value for value, count in Counter(values).items() if count > 1)
            if duplicates:
                log.warning("Duplicate %s in catalog, first entry wins: %s", label, duplicates)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> MetadataCatalog:
        """Build a fixed catalog from ``{logical_name: path_segment}``."""

        return cls(
            entries=tuple(
                ResourceTypeEntry(logical_name=logical, path_segment=path)
                for logical, path in mapping.items()
            )
        )

    def path_for(self, logical_name: str) -> str | None:
        for entry in self.entries:
            if entry.logical_name == logical_name:
                return entry.path_segment
        return None

    def logical_for(self, path_segment: str) -> str | None:
        for entry in self.entries:
            if entry.path_segment == path_segment:
                return entry.logical_name
        return None

    def __iter__(self) -> Iterator[ResourceTypeEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def load_catalog(api: ResourceAPI) -> MetadataCatalog:
    """Fetch server info and resource types with a single port call."""

    try:
        snapshot = api.heartbeat_and_catalog()
    except TransportError as exc:
        raise UnreachableError(f"failed to heartbeat control-plane: {exc}") from exc
    except ValueError as exc:
        raise MalformedCatalogError(f"failed to decode catalog: {exc}") from exc

    catalog = MetadataCatalog(
        entries=tuple(snapshot.entries),
        product=snapshot.product,
        version=snapshot.version,
    )
    log.info(
        "successfully checked connection: product=%s version=%s types=%d",
        catalog.product,
        catalog.version,
        len(catalog),
    )
    return catalog
