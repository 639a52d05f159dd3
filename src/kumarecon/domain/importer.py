"""Parse external import identifiers into resource identities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import InvalidImportIdError
from .model import Identity

if TYPE_CHECKING:
    from .catalog import MetadataCatalog

IMPORT_ID_FORMAT = "`/<mesh>/<typeOrPath>/<name>` or `/<typeOrPath>/<name>`"


def parse_import_id(value: str, catalog: MetadataCatalog) -> Identity:
    """Split ``mesh/typeOrPath/name`` (or ``typeOrPath/name``) into an identity.

    The two-segment form addresses a resource with an empty mesh. The middle
    segment may be an API path segment or a logical type name.
    """

    parts = value.strip("/").split("/")
    if len(parts) == 2:
        parts = ["", *parts]
    if len(parts) != 3:
        raise InvalidImportIdError(
            f"the id of a resource must be of the format: {IMPORT_ID_FORMAT} "
            f"(this matches the api path of the resource), got '{value}'"
        )

    mesh, type_or_path, name = parts
    logical_type = catalog.logical_for(type_or_path) or type_or_path
    return Identity(
        mesh=mesh,
        path_segment=catalog.path_for(logical_type) or type_or_path,
        logical_type=logical_type,
        name=name,
    )
