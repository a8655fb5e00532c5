"""Aggregate a file-based package catalog into mirror, release and ware tables."""

from .content_address import normalize_scheme, resolve_ca_link
from .mirrors import merge_mirrors
from .schema import (
    CatalogMirrors,
    CatalogMirrorsCapsule,
    CatalogModule,
    CatalogModuleCapsule,
    CatalogRelease,
    ReleaseItem,
)
from .wares import join, resolve_all, split_catalog_ref, split_ware_id

__all__ = [
    "CatalogMirrors",
    "CatalogMirrorsCapsule",
    "CatalogModule",
    "CatalogModuleCapsule",
    "CatalogRelease",
    "ReleaseItem",
    "join",
    "merge_mirrors",
    "normalize_scheme",
    "resolve_all",
    "resolve_ca_link",
    "split_catalog_ref",
    "split_ware_id",
]
