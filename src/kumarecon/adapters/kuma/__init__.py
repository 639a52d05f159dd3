"""Public interface for the Kuma control-plane adapter."""

from __future__ import annotations

from .client import KumaClient, resource_path
from .schema import IndexResponse, PoliciesResponse, PolicyDescriptor

__all__ = [
    "IndexResponse",
    "KumaClient",
    "PoliciesResponse",
    "PolicyDescriptor",
    "resource_path",
]
