"""Utility helpers shared across the catalog-manifest codebase."""

from .config import DEFAULT_CONFIG, CatalogConfig, load_config
from .logging import configure_logging, get_logger

__all__ = [
    "CatalogConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "configure_logging",
    "get_logger",
]
