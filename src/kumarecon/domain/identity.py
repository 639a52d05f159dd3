"""Resolve the (mesh, type, name) triple addressing a resource."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import MalformedDocumentError, UnsupportedTypeError
from .model import Identity
from .normalize import parse_document

if TYPE_CHECKING:
    from .catalog import MetadataCatalog
    from .model import DeclaredResource, ResourceState

log = logging.getLogger(__name__)


@dataclass(slots=True)
class _Coordinates:
    mesh: str | None
    resource_type: str | None
    name: str | None

    @property
    def complete(self) -> bool:
        return None not in (self.mesh, self.resource_type, self.name)

    def require(self) -> tuple[str, str, str]:
        """Return ``(mesh, type, name)`` or fail naming the attributes still unknown."""

        if self.mesh is None or self.resource_type is None or self.name is None:
            raise MalformedDocumentError(
                f"cannot determine {', '.join(self.missing())} from the declared resource"
            )
        return self.mesh, self.resource_type, self.name

    def missing(self) -> list[str]:
        return [
            label
            for label, value in (
                ("mesh", self.mesh),
                ("type", self.resource_type),
                ("name", self.name),
            )
            if value is None
        ]


def resolve_identity(
    declared: DeclaredResource,
    catalog: MetadataCatalog,
    *,
    prior: ResourceState | None = None,
) -> Identity:
    """Resolve ``declared`` to an identity the control plane can address.

    Explicit attributes always win. Unknown attributes come from ``prior`` when
    the resource already has a committed identity, and from the top-level
    ``mesh``/``type``/``name`` keys of the body otherwise.
    """

    coords = _Coordinates(declared.mesh, declared.resource_type, declared.name)

    if coords.resource_type is not None:
        _path_for(coords.resource_type, catalog)

    if not coords.complete:
        if prior is not None:
            _fill_from_prior(coords, prior.identity)
        else:
            _fill_from_document(coords, declared.body)

    mesh, resource_type, name = coords.require()
    return Identity(
        mesh=mesh,
        path_segment=_path_for(resource_type, catalog),
        logical_type=resource_type,
        name=name,
    )


def identity_for_state(state: ResourceState, catalog: MetadataCatalog) -> Identity:
    """Re-resolve a stored identity through ``catalog`` without touching the body."""

    stored = state.identity
    return Identity(
        mesh=stored.mesh,
        path_segment=_path_for(stored.logical_type, catalog),
        logical_type=stored.logical_type,
        name=stored.name,
    )


def _path_for(resource_type: str, catalog: MetadataCatalog) -> str:
    path_segment = catalog.path_for(resource_type)
    if path_segment is None:
        raise UnsupportedTypeError(resource_type)
    return path_segment


def _fill_from_prior(coords: _Coordinates, identity: Identity) -> None:
    if coords.mesh is None:
        coords.mesh = identity.mesh
    if coords.resource_type is None:
        coords.resource_type = identity.logical_type
    if coords.name is None:
        coords.name = identity.name


def _fill_from_document(coords: _Coordinates, body: str) -> None:
    meta = parse_document(body)
    mesh = meta.get("mesh")
    resource_type = meta.get("type")
    name = meta.get("name")
    if coords.mesh is None and isinstance(mesh, str):
        coords.mesh = mesh
    if coords.resource_type is None and isinstance(resource_type, str):
        coords.resource_type = resource_type
    if coords.name is None and isinstance(name, str):
        coords.name = name
    log.debug(
        "Derived identity from document: mesh=%s type=%s name=%s",
        coords.mesh,
        coords.resource_type,
        coords.name,
    )
