from __future__ import annotations

import json
import logging

import pytest

from kumarecon.domain import (
    AlreadyExistsError,
    DeclaredResource,
    DeleteError,
    DeleteOutcome,
    Identity,
    InvalidImportIdError,
    MalformedDocumentError,
    MetadataCatalog,
    PostWriteMissingError,
    Reconciler,
    ResourceState,
    TransportError,
    UnsupportedTypeError,
)
from tests.support.fake_api import FakeResourceAPI, transport_error

PERMISSION = Identity(
    mesh="default",
    path_segment="meshtrafficpermissions",
    logical_type="MeshTrafficPermission",
    name="test-1",
)


def test_create_writes_then_returns_normalized_server_state(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
    permission_body: str,
    permission_document: dict[str, object],
) -> None:
    state = reconciler.create(DeclaredResource(body=permission_body))

    assert fake_api.operations() == ["fetch", "put", "fetch"]
    assert state.identity == PERMISSION
    assert json.loads(state.body) == permission_document
    assert "creationTime" not in state.body
    stored = json.loads(fake_api.resources[("default", "meshtrafficpermissions", "test-1")])
    assert "creationTime" in stored


def test_create_twice_fails_with_already_exists(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
    permission_body: str,
) -> None:
    reconciler.create(DeclaredResource(body=permission_body))
    fake_api.calls.clear()

    with pytest.raises(AlreadyExistsError, match="already exists"):
        reconciler.create(DeclaredResource(body=permission_body))

    assert fake_api.operations() == ["fetch"]


def test_create_detects_writes_lost_by_backend(
    catalog: MetadataCatalog,
    permission_body: str,
) -> None:
    api = FakeResourceAPI(lose_writes=True)
    reconciler = Reconciler(api=api, catalog=catalog)

    with pytest.raises(PostWriteMissingError):
        reconciler.create(DeclaredResource(body=permission_body))


def test_create_with_unsupported_type_makes_no_network_call(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
) -> None:
    declared = DeclaredResource(body='{"mesh": "default", "name": "x", "type": "MeshNope"}')

    with pytest.raises(UnsupportedTypeError):
        reconciler.create(declared)

    assert fake_api.calls == []


def test_create_surfaces_transport_errors_verbatim(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
    permission_body: str,
) -> None:
    error = transport_error(status=409, body="conflict")
    fake_api.failures["put"] = error

    with pytest.raises(TransportError) as exc:
        reconciler.create(DeclaredResource(body=permission_body))

    assert exc.value is error
    assert exc.value.status == 409
    assert exc.value.body == "conflict"
    assert fake_api.operations() == ["fetch", "put"]


def test_create_with_malformed_document_fails(reconciler: Reconciler) -> None:
    with pytest.raises(MalformedDocumentError):
        reconciler.create(DeclaredResource(body="{not json"))


def test_update_is_idempotent(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
    permission_body: str,
) -> None:
    declared = DeclaredResource(body=permission_body)

    first = reconciler.update(declared)
    second = reconciler.update(declared)

    assert first == second
    assert fake_api.operations() == ["put", "fetch", "put", "fetch"]


def test_update_does_not_check_for_existence(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
    permission_body: str,
) -> None:
    state = reconciler.update(DeclaredResource(body=permission_body))

    assert fake_api.operations()[0] == "put"
    assert state.identity == PERMISSION


def test_update_keeps_committed_identity(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
    permission_body: str,
) -> None:
    prior = reconciler.create(DeclaredResource(body=permission_body))
    changed = json.loads(permission_body)
    changed["name"] = "renamed"
    changed["spec"] = {"targetRef": {"kind": "Mesh"}}

    state = reconciler.update(DeclaredResource(body=json.dumps(changed)), prior=prior)

    assert state.identity == PERMISSION
    assert ("default", "meshtrafficpermissions", "renamed") not in fake_api.resources


def test_update_detects_writes_lost_by_backend(
    catalog: MetadataCatalog,
    permission_body: str,
) -> None:
    reconciler = Reconciler(api=FakeResourceAPI(lose_writes=True), catalog=catalog)

    with pytest.raises(PostWriteMissingError):
        reconciler.update(DeclaredResource(body=permission_body))


def test_read_returns_normalized_state(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
) -> None:
    fake_api.seed(
        "default",
        "meshtrafficpermissions",
        "test-1",
        {"name": "test-1", "modificationTime": "2024-01-01T00:00:00Z"},
    )

    state = reconciler.read(ResourceState(identity=PERMISSION, body="{}"))

    assert state is not None
    assert state.body == '{"name":"test-1"}'


def test_read_signals_absence_with_none(reconciler: Reconciler) -> None:
    assert reconciler.read(ResourceState(identity=PERMISSION, body="{}")) is None


def test_read_never_rederives_identity_from_body(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
) -> None:
    prior = ResourceState(
        identity=PERMISSION,
        body='{"mesh": "elsewhere", "name": "other", "type": "MeshTimeout"}',
    )

    reconciler.read(prior)

    assert fake_api.calls == [("fetch", "default", "meshtrafficpermissions", "test-1")]


def test_repeated_reads_are_stable(
    reconciler: Reconciler,
    permission_body: str,
) -> None:
    created = reconciler.create(DeclaredResource(body=permission_body))

    assert reconciler.read(created) == created
    assert reconciler.read(created) == created


def test_delete_then_read_yields_absence(
    reconciler: Reconciler,
    permission_body: str,
) -> None:
    state = reconciler.create(DeclaredResource(body=permission_body))

    assert reconciler.delete(state) is DeleteOutcome.DELETED
    assert reconciler.read(state) is None


def test_delete_on_absent_resource_is_a_warning(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="kumarecon.domain.reconciler"):
        outcome = reconciler.delete(ResourceState(identity=PERMISSION, body="{}"))

    assert outcome is DeleteOutcome.ALREADY_DELETED
    assert fake_api.operations() == ["fetch"]
    assert "already deleted" in caplog.text


def test_delete_failure_is_wrapped(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
    permission_body: str,
) -> None:
    state = reconciler.create(DeclaredResource(body=permission_body))
    fake_api.failures["delete"] = transport_error(status=500)

    with pytest.raises(DeleteError, match="Unable to delete"):
        reconciler.delete(state)


def test_delete_fetch_failure_is_not_wrapped(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
) -> None:
    fake_api.failures["fetch"] = transport_error(status=502)

    with pytest.raises(TransportError):
        reconciler.delete(ResourceState(identity=PERMISSION, body="{}"))


def test_import_resource_reads_identified_resource(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
    permission_body: str,
) -> None:
    created = reconciler.create(DeclaredResource(body=permission_body))

    imported = reconciler.import_resource("default/meshtrafficpermissions/test-1")

    assert imported == created


def test_import_resource_rejects_bad_ids_before_network(
    reconciler: Reconciler,
    fake_api: FakeResourceAPI,
) -> None:
    with pytest.raises(InvalidImportIdError):
        reconciler.import_resource("a/b/c/d")

    assert fake_api.calls == []


def test_import_resource_with_unknown_type_fails(reconciler: Reconciler) -> None:
    with pytest.raises(UnsupportedTypeError):
        reconciler.import_resource("default/MeshUnknown/x")
