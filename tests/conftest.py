from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import pytest


class CatalogBuilder:
    """Write catalog fixture files below a root directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def write_json(self, rel_path: str, payload: Any) -> Path:
        path = self.root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path

    def mirrors(
        self,
        rel_dir: str = ".",
        by_ware: Optional[Mapping[str, list]] = None,
        by_module: Optional[Mapping[str, Mapping[str, list]]] = None,
    ) -> Path:
        body: Dict[str, Any] = {"byWare": dict(by_ware or {}), "byModule": dict(by_module or {})}
        return self.write_json(f"{rel_dir}/_mirrors.json", {"catalogmirrors.v1": body})

    def module(self, rel_dir: str, name: str, releases: Mapping[str, str]) -> Path:
        body = {"name": name, "releases": dict(releases), "metadata": {}}
        return self.write_json(f"{rel_dir}/_module.json", {"catalogmodule.v1": body})

    def release(self, rel_dir: str, name: str, items: Mapping[str, str], file_name: Optional[str] = None) -> Path:
        body = {"releaseName": name, "items": dict(items), "metadata": {}}
        return self.write_json(f"{rel_dir}/_releases/{file_name or name + '.json'}", body)


@pytest.fixture
def catalog(tmp_path: Path) -> CatalogBuilder:
    root = tmp_path / "catalog"
    root.mkdir()
    return CatalogBuilder(root)
