"""Failure taxonomy for resource reconciliation."""

from __future__ import annotations


class KumaReconcileError(RuntimeError):
    """Base class for every failure surfaced by the reconciliation engine."""


class TransportError(KumaReconcileError):
    """Raised when the control plane is unreachable or answers with an unexpected status."""

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class UnreachableError(KumaReconcileError):
    """Raised when the catalog cannot be fetched from the control plane."""


class MalformedCatalogError(KumaReconcileError):
    """Raised when the catalog payload cannot be decoded."""


class MalformedDocumentError(KumaReconcileError):
    """Raised when a resource document is not a JSON object."""


class UnsupportedTypeError(KumaReconcileError):
    """Raised when a logical resource type is not known to the control plane."""

    def __init__(self, resource_type: str) -> None:
        super().__init__(f"Resource type '{resource_type}' is not supported by the server")
        self.resource_type = resource_type


class AlreadyExistsError(KumaReconcileError):
    """Raised when creating a resource that is already present."""


class PostWriteMissingError(KumaReconcileError):
    """Raised when a resource is absent right after a successful write."""


class DeleteError(KumaReconcileError):
    """Raised when the control plane refuses to delete a resource."""


class InvalidImportIdError(KumaReconcileError, ValueError):
    """Raised when an import identifier does not have two or three segments."""
