"""Domain port definitions for adapters."""

from __future__ import annotations

from .resources import CatalogSnapshot, ResourceAPI

__all__ = ["CatalogSnapshot", "ResourceAPI"]
