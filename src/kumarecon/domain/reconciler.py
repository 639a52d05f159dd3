"""Create/read/update/delete cycles for a single managed resource.

Every mutation is followed by a fetch so the returned state reflects what the
control plane stored, not what was sent. The engine keeps no state between
calls; callers hand back the ``ResourceState`` they got from the previous
operation. Calls for the same resource must not overlap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .errors import AlreadyExistsError, DeleteError, PostWriteMissingError, TransportError
from .identity import identity_for_state, resolve_identity
from .importer import parse_import_id
from .model import ResourceState
from .normalize import normalize_document

if TYPE_CHECKING:
    from .catalog import MetadataCatalog
    from .model import DeclaredResource, Identity
    from .ports.resources import ResourceAPI

log = logging.getLogger(__name__)


class DeleteOutcome(StrEnum):
    DELETED = "deleted"
    ALREADY_DELETED = "already_deleted"


@dataclass(slots=True)
class Reconciler:
    """Drive a ``ResourceAPI`` towards the declared state of one resource."""

    api: ResourceAPI
    catalog: MetadataCatalog

    def create(self, declared: DeclaredResource) -> ResourceState:
        identity = resolve_identity(declared, self.catalog)
        log.debug("Creating %s", identity.import_id)

        if self._fetch(identity) is not None:
            raise AlreadyExistsError(f"Resource '{identity.import_id}' already exists")

        return self._write(identity, declared.body)

    def read(self, prior: ResourceState) -> ResourceState | None:
        """Refresh ``prior`` from the control plane; ``None`` means it no longer exists."""

        identity = identity_for_state(prior, self.catalog)
        raw = self._fetch(identity)
        if raw is None:
            log.info("Resource %s no longer exists", identity.import_id)
            return None
        return ResourceState(identity=identity, body=normalize_document(raw))

    def update(
        self,
        declared: DeclaredResource,
        *,
        prior: ResourceState | None = None,
    ) -> ResourceState:
        identity = resolve_identity(declared, self.catalog, prior=prior)
        log.debug("Updating %s", identity.import_id)
        return self._write(identity, declared.body)

    def delete(self, prior: ResourceState) -> DeleteOutcome:
        identity = identity_for_state(prior, self.catalog)
        if self._fetch(identity) is None:
            log.warning("Resource %s was already deleted", identity.import_id)
            return DeleteOutcome.ALREADY_DELETED

        try:
            self.api.delete(identity.mesh, identity.path_segment, identity.name)
        except TransportError as exc:
            raise DeleteError(f"Unable to delete resource, got error: {exc}") from exc
        log.debug("Deleted %s", identity.import_id)
        return DeleteOutcome.DELETED

    def import_resource(self, import_id: str) -> ResourceState | None:
        """Parse ``import_id`` and read the resource it addresses."""

        identity = parse_import_id(import_id, self.catalog)
        return self.read(ResourceState(identity=identity, body=""))

    def _write(self, identity: Identity, body: str) -> ResourceState:
        self.api.put(identity.mesh, identity.path_segment, identity.name, body)
        raw = self._fetch(identity)
        if raw is None:
            raise PostWriteMissingError(
                f"Resource '{identity.import_id}' didn't exist just after the put"
            )
        return ResourceState(identity=identity, body=normalize_document(raw))

    def _fetch(self, identity: Identity) -> bytes | None:
        return self.api.fetch(identity.mesh, identity.path_segment, identity.name)
