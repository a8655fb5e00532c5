"""Collect and merge the mirror fragments scattered across a catalog."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .errors import CatalogDocumentError
from .io import load_document
from .schema import CatalogMirrors, CatalogMirrorsCapsule
from .utils.config import DEFAULT_CONFIG, CatalogConfig
from .utils.logging import get_logger


LOGGER = get_logger(__name__)


def _union(left: Iterable[str], right: Iterable[str]) -> List[str]:
    return sorted(set(left).union(right))


def merge_mirrors(left: CatalogMirrors, right: CatalogMirrors) -> CatalogMirrors:
    """Return the union of two mirror tables.

    Location sets are unioned per ware id and per (module, pack-type)
    pair. Modules with no pack-types are dropped from both sides, which
    keeps the operation commutative and associative.
    """

    by_ware: Dict[str, List[str]] = {}
    for table in (left, right):
        for ware_id, locations in table.by_ware.items():
            by_ware[ware_id] = _union(by_ware.get(ware_id, ()), locations)

    by_module: Dict[str, Dict[str, List[str]]] = {}
    for table in (left, right):
        for module, inner in table.by_module.items():
            if not inner:
                continue
            outer = by_module.setdefault(module, {})
            for pack_type, locations in inner.items():
                outer[pack_type] = _union(outer.get(pack_type, ()), locations)

    return CatalogMirrors(
        by_ware=dict(sorted(by_ware.items())),
        by_module={module: dict(sorted(inner.items())) for module, inner in sorted(by_module.items())},
    )


def read_mirrors_file(path: Path) -> CatalogMirrorsCapsule:
    """Load one mirror fragment capsule from ``path``."""

    return load_document(path, CatalogMirrorsCapsule)


def collect(root: Path, config: Optional[CatalogConfig] = None) -> CatalogMirrorsCapsule:
    """Walk ``root`` depth-first and merge every mirror fragment found.

    A fragment that cannot be read or decoded is logged and skipped.
    Failing to list a directory, or a fragment tagged with an unknown
    capsule version, aborts the walk.
    """

    config = config or DEFAULT_CONFIG
    return CatalogMirrorsCapsule.wrap(_collect(Path(root), config))


def _collect(directory: Path, config: CatalogConfig) -> CatalogMirrors:
    result = CatalogMirrors()
    with os.scandir(directory) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            result = merge_mirrors(result, _collect(path, config))
        elif entry.is_file(follow_symlinks=False) and entry.name == config.mirrors_file_name:
            try:
                capsule = read_mirrors_file(path)
            except (OSError, CatalogDocumentError) as exc:
                LOGGER.warning("Skipping unreadable mirrors file %s: %s", path, exc)
                continue
            result = merge_mirrors(result, capsule.mirrors)
    return result
