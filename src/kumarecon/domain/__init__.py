"""Resource reconciliation engine.

Flow per operation:
1) resolve the identity of the resource (explicit attributes, prior state, or
   the document body) and map its type to an API path through the catalog
2) call the resource port (fetch, put, delete)
3) fetch again after a mutation and normalize what the server returned
"""

from __future__ import annotations

from .catalog import MetadataCatalog, ResourceTypeEntry, load_catalog
from .errors import (
    AlreadyExistsError,
    DeleteError,
    InvalidImportIdError,
    KumaReconcileError,
    MalformedCatalogError,
    MalformedDocumentError,
    PostWriteMissingError,
    TransportError,
    UnreachableError,
    UnsupportedTypeError,
)
from .identity import identity_for_state, resolve_identity
from .importer import parse_import_id
from .model import DeclaredResource, Identity, ResourceState
from .normalize import normalize_document
from .reconciler import DeleteOutcome, Reconciler

__all__ = [
    "AlreadyExistsError",
    "DeclaredResource",
    "DeleteError",
    "DeleteOutcome",
    "Identity",
    "InvalidImportIdError",
    "KumaReconcileError",
    "MalformedCatalogError",
    "MalformedDocumentError",
    "MetadataCatalog",
    "PostWriteMissingError",
    "Reconciler",
    "ResourceState",
    "ResourceTypeEntry",
    "TransportError",
    "UnreachableError",
    "UnsupportedTypeError",
    "identity_for_state",
    "load_catalog",
    "normalize_document",
    "parse_import_id",
    "resolve_identity",
]
