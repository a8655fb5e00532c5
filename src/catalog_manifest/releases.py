"""Collect module releases into a flat catalog reference table."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

from .errors import MalformedCatalogError
from .io import load_document
from .schema import CatalogModule, CatalogModuleCapsule, CatalogRelease, ReleaseItem
from .utils.config import DEFAULT_CONFIG, CatalogConfig
from .utils.logging import get_logger


LOGGER = get_logger(__name__)
RELEASE_SUFFIX = ".json"


def load_module(directory: Path, config: Optional[CatalogConfig] = None) -> Optional[CatalogModule]:
    """Return the module described in ``directory``, or ``None`` if it has no descriptor."""

    config = config or DEFAULT_CONFIG
    path = directory / config.module_file_name
    if not path.exists():
        return None
    return load_document(path, CatalogModuleCapsule).module


def read_release_file(path: Path) -> CatalogRelease:
    """Load a release file and check that its name matches the release it declares."""

    if not path.name.endswith(RELEASE_SUFFIX):
        raise MalformedCatalogError(f'malformed catalog: release file does not end in .json "{path}"')
    release = load_document(path, CatalogRelease)
    expected = path.name[: -len(RELEASE_SUFFIX)]
    if release.name != expected:
        raise MalformedCatalogError(
            f'malformed catalog: release file "{path}" does not have the same name as release "{release.name}"'
        )
    return release


def process_module(
    module: CatalogModule, directory: Path, config: Optional[CatalogConfig] = None
) -> Dict[str, str]:
    """Map every ``module:release:item`` reference of one module to its ware id."""

    config = config or DEFAULT_CONFIG
    result: Dict[str, str] = {}
    releases_path = directory / config.releases_dir_name
    if not releases_path.exists():
        if not module.releases:
            return result
        raise MalformedCatalogError(
            f"module file contains releases but releases directory does not exist: {releases_path}"
        )

    with os.scandir(releases_path) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        path = Path(entry.path)
        if not entry.is_file(follow_symlinks=False):
            raise MalformedCatalogError(f'releases directory contained a non-regular file "{path}"')
        release = read_release_file(path)
        if release.name not in module.releases:
            LOGGER.warning(
                'release file "%s" contains release "%s" not found in module releases', path, release.name
            )
        for item, ware_id in release.items.items():
            catalog_ref = str(ReleaseItem(module.name, release.name, item))
            if catalog_ref in result:
                raise MalformedCatalogError(f"malformed catalog: found duplicate catalog ref item: {catalog_ref}")
            result[catalog_ref] = ware_id

    if len(ordered) != len(module.releases):
        LOGGER.warning(
            'processed %d release files but expected %d from module "%s"',
            len(ordered),
            len(module.releases),
            module.name,
        )
    return result


def collect(root: Path, config: Optional[CatalogConfig] = None) -> Dict[str, str]:
    """Walk ``root`` and return the catalog reference to ware id table.

    A directory holding a module descriptor is a leaf of the walk. Any
    other directory contributes the union of its subdirectories, and a
    reference produced by two subtrees is an error.
    """

    config = config or DEFAULT_CONFIG
    return dict(sorted(_collect(Path(root), config).items()))


def _collect(directory: Path, config: CatalogConfig) -> Dict[str, str]:
    module = load_module(directory, config)
    if module is not None:
        return process_module(module, directory, config)

    result: Dict[str, str] = {}
    with os.scandir(directory) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        if not entry.is_dir(follow_symlinks=False):
            continue
        for catalog_ref, ware_id in _collect(Path(entry.path), config).items():
            if catalog_ref in result:
                raise MalformedCatalogError(f"malformed catalog: found duplicate catalog ref item: {catalog_ref}")
            result[catalog_ref] = ware_id
    return result
