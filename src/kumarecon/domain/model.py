"""Value types passed between the front end and the reconciliation engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Identity:
    """Addressable coordinates of one resource on the control plane."""

    mesh: str
    path_segment: str
    logical_type: str
    name: str

    @property
    def import_id(self) -> str:
        return f"{self.mesh}/{self.logical_type}/{self.name}"


@dataclass(slots=True, frozen=True, kw_only=True)
class DeclaredResource:
    """Desired state as authored by the user.

    ``None`` marks an identity attribute as unknown; it is then derived from
    the document body on first resolution.
    """

    body: str
    mesh: str | None = None
    resource_type: str | None = None
    name: str | None = None


@dataclass(slots=True, frozen=True)
class ResourceState:
    """Observed state kept by the front end between operations.

    ``body`` is always a normalized document.
    """

    identity: Identity
    body: str
