"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from kumarecon.adapters.kuma import KumaClient
from kumarecon.config import get_kuma_config
from kumarecon.domain import (
    DeclaredResource,
    Reconciler,
    ResourceState,
    load_catalog,
    resolve_identity,
)

if TYPE_CHECKING:
    from kumarecon.config import KumaConfig
    from kumarecon.domain.ports import ResourceAPI

log = getLogger(__name__)


class ApplyAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"


@dataclass(slots=True, frozen=True)
class ApplyResult:
    action: ApplyAction
    state: ResourceState


def build_reconciler(
    *,
    api: ResourceAPI | None = None,
    config: KumaConfig | None = None,
) -> Reconciler:
    """Connect to the control plane, load its catalog and return a reconciler."""

    effective_api = api if api is not None else KumaClient(config=config or get_kuma_config())
    catalog = load_catalog(effective_api)
    return Reconciler(api=effective_api, catalog=catalog)


def apply_resource(reconciler: Reconciler, declared: DeclaredResource) -> ApplyResult:
    """Create ``declared`` when it is absent on the control plane, update it otherwise."""

    identity = resolve_identity(declared, reconciler.catalog)
    existing = reconciler.read(ResourceState(identity=identity, body=""))
    if existing is None:
        state = reconciler.create(declared)
        action = ApplyAction.CREATED
    else:
        state = reconciler.update(declared, prior=existing)
        action = ApplyAction.UPDATED

    log.info("Resource %s %s", state.identity.import_id, action)
    return ApplyResult(action=action, state=state)
