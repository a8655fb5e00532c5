"""Join mirror and release tables into ware id to URL mappings."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Set, Tuple

from . import mirrors, releases
from .content_address import resolve_ca_link
from .errors import MalformedIdentifierError, MirrorLocationError
from .schema import CatalogMirrorsCapsule
from .utils.config import CatalogConfig
from .utils.logging import get_logger


LOGGER = get_logger(__name__)
GIT_PACK_TYPE = "git"


def split_catalog_ref(catalog_ref: str) -> Tuple[str, str, str]:
    """Split ``module:release:item``; the item keeps any further colons."""

    parts = catalog_ref.split(":", 2)
    if len(parts) < 3:
        raise MalformedIdentifierError(f'expected release id "{catalog_ref}" to have three parts')
    module, release, item = parts
    return module, release, item


def split_ware_id(ware_id: str) -> Tuple[str, str]:
    """Split ``packtype:hash``; the hash keeps any further colons."""

    parts = ware_id.split(":", 1)
    if len(parts) < 2:
        raise MalformedIdentifierError(f'expected ware id "{ware_id}" to have two parts')
    pack_type, ware_hash = parts
    return pack_type, ware_hash


def join(capsule: CatalogMirrorsCapsule, release_table: Mapping[str, str]) -> Dict[str, List[str]]:
    """Resolve the mirror URLs of every ware in ``capsule`` and ``release_table``.

    Explicit per-ware mirrors are resolved first; a mirror that fails to
    resolve is logged and skipped, and a plain mirror is kept verbatim.
    Then each released ware picks up the mirrors registered for its
    module and pack-type. Those must be content-addressable, except for
    ``git`` wares whose mirrors are kept as written.
    """

    table = capsule.mirrors
    by_module = {module: dict(inner) for module, inner in table.by_module.items()}
    result: Dict[str, Set[str]] = {}

    for ware_id, locations in table.by_ware.items():
        _, ware_hash = split_ware_id(ware_id)
        for location in locations:
            try:
                link = resolve_ca_link(location, ware_hash)
            except MirrorLocationError as exc:
                LOGGER.warning("unable to process link for %s: %s: %s", ware_id, location, exc)
                continue
            result.setdefault(ware_id, set()).add(link if link is not None else location)

    for catalog_ref, ware_id in release_table.items():
        module, _, _ = split_catalog_ref(catalog_ref)
        pack_type, ware_hash = split_ware_id(ware_id)
        pack_mirrors = by_module.setdefault(module, {}).setdefault(pack_type, [])
        ware_mirrors = result.setdefault(ware_id, set())
        for mirror in pack_mirrors:
            if pack_type == GIT_PACK_TYPE:
                ware_mirrors.add(mirror)
                continue
            link = resolve_ca_link(mirror, ware_hash)
            if link is None:
                LOGGER.warning(
                    "by module mirrors must have content-addressable scheme (e.g. ca+https): %s:%s = %s",
                    module,
                    pack_type,
                    mirror,
                )
                continue
            ware_mirrors.add(link)

    return {ware_id: sorted(urls) for ware_id, urls in sorted(result.items())}


def resolve_all(root: Path, config: Optional[CatalogConfig] = None) -> Dict[str, List[str]]:
    """Collect mirrors and releases under ``root`` and join them."""

    mirror_capsule = mirrors.collect(root, config)
    release_table = releases.collect(root, config)
    return join(mirror_capsule, release_table)
