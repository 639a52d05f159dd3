from __future__ import annotations

import pytest

from kumarecon.domain import Identity, InvalidImportIdError, MetadataCatalog, parse_import_id

EXPECTED = Identity(
    mesh="default",
    path_segment="meshtrafficpermissions",
    logical_type="MeshTrafficPermission",
    name="test-1",
)


def test_three_segment_id_with_path_segment(catalog: MetadataCatalog) -> None:
    assert parse_import_id("default/meshtrafficpermissions/test-1", catalog) == EXPECTED


def test_three_segment_id_with_logical_name(catalog: MetadataCatalog) -> None:
    assert parse_import_id("default/MeshTrafficPermission/test-1", catalog) == EXPECTED


def test_two_segment_id_uses_empty_mesh(catalog: MetadataCatalog) -> None:
    identity = parse_import_id("meshtrafficpermissions/test-1", catalog)

    assert identity.mesh == ""
    assert identity.logical_type == "MeshTrafficPermission"
    assert identity.name == "test-1"


def test_surrounding_slashes_are_trimmed(catalog: MetadataCatalog) -> None:
    assert parse_import_id("/default/meshtrafficpermissions/test-1/", catalog) == EXPECTED


@pytest.mark.parametrize("value", ["a/b/c/d", "single", "", "/"])
def test_wrong_segment_count_is_rejected(catalog: MetadataCatalog, value: str) -> None:
    with pytest.raises(InvalidImportIdError, match="must be of the format"):
        parse_import_id(value, catalog)


def test_unknown_middle_segment_is_kept_verbatim(catalog: MetadataCatalog) -> None:
    identity = parse_import_id("default/MeshUnknown/x", catalog)

    assert identity.logical_type == "MeshUnknown"
    assert identity.path_segment == "MeshUnknown"
