"""Strip server-generated fields from resource documents."""

from __future__ import annotations

import json
from typing import Any, Final

from .errors import MalformedDocumentError

SERVER_GENERATED_FIELDS: Final[tuple[str, ...]] = ("creationTime", "modificationTime")


def parse_document(raw: bytes | str) -> dict[str, Any]:
    """Decode ``raw`` as a JSON object."""

    try:
        document = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedDocumentError(f"json parse failed, error: {exc}") from exc
    if not isinstance(document, dict):
        raise MalformedDocumentError(
            f"expected a JSON object, got {type(document).__name__}"
        )
    return document


def dump_document(document: dict[str, Any]) -> str:
    return json.dumps(document, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def normalize_document(raw: bytes | str) -> str:
    """Return ``raw`` without ``creationTime``/``modificationTime`` in canonical form.

    Canonical form is compact JSON with sorted keys, so normalizing an already
    normalized document is a no-op.
    """

    document = parse_document(raw)
    for name in SERVER_GENERATED_FIELDS:
        document.pop(name, None)
    return dump_document(document)
