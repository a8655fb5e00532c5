"""Exceptions raised while reading and joining a catalog."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class CatalogError(Exception):
    """Base class for fatal catalog errors."""


class MalformedCatalogError(CatalogError, ValueError):
    """Raised when the catalog tree violates a structural invariant."""


class CatalogDocumentError(MalformedCatalogError):
    """Raised when a required JSON document cannot be decoded."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class MalformedIdentifierError(CatalogError, ValueError):
    """Raised when a ware id or catalog reference has too few parts."""


class UnsupportedCapsuleVersion(CatalogError, NotImplementedError):
    """Raised for a capsule tagged with an unknown schema version."""


class MirrorLocationError(CatalogError, ValueError):
    """Raised when a mirror cannot be turned into a ware URL."""


__all__ = [
    "CatalogDocumentError",
    "CatalogError",
    "MalformedCatalogError",
    "MalformedIdentifierError",
    "MirrorLocationError",
    "UnsupportedCapsuleVersion",
]
