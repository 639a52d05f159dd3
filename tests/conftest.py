from __future__ import annotations

import json

import pytest

from kumarecon.domain import MetadataCatalog, Reconciler, load_catalog
from tests.support.fake_api import FakeResourceAPI


@pytest.fixture
def fake_api() -> FakeResourceAPI:
    return FakeResourceAPI()


@pytest.fixture
def catalog(fake_api: FakeResourceAPI) -> MetadataCatalog:
    return load_catalog(fake_api)


@pytest.fixture
def reconciler(fake_api: FakeResourceAPI, catalog: MetadataCatalog) -> Reconciler:
    fake_api.calls.clear()
    return Reconciler(api=fake_api, catalog=catalog)


@pytest.fixture
def permission_document() -> dict[str, object]:
    return {
        "type": "MeshTrafficPermission",
        "name": "test-1",
        "mesh": "default",
        "spec": {
            "targetRef": {"kind": "Mesh"},
            "from": [
                {"targetRef": {"kind": "Mesh"}, "default": {"action": "Allow"}},
                {"targetRef": {"kind": "MeshService", "name": "foo"}, "default": {"action": "Deny"}},
            ],
        },
    }


@pytest.fixture
def permission_body(permission_document: dict[str, object]) -> str:
    return json.dumps(permission_document)
