"""Configuration helpers for catalog-manifest."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field


class CatalogConfig(BaseModel):
    """Names of the well-known catalog files and runtime options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mirrors_file_name: str = Field(default="_mirrors.json", min_length=1)
    module_file_name: str = Field(default="_module.json", min_length=1)
    releases_dir_name: str = Field(default="_releases", min_length=1)
    log_level: str = "INFO"


DEFAULT_CONFIG = CatalogConfig()


def load_config(path: Optional[Path]) -> CatalogConfig:
    """Load configuration from a YAML file, falling back to defaults."""

    data: Dict[str, Any] = {}
    if path is not None and path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return CatalogConfig.model_validate(data)
