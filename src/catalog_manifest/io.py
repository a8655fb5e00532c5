"""I/O helpers for reading catalog JSON documents."""
from __future__ import annotations

from pathlib import Path
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import CatalogDocumentError


ModelT = TypeVar("ModelT", bound=BaseModel)


def load_document(path: Path, model: Type[ModelT]) -> ModelT:
    """Read ``path`` and validate its JSON content against ``model``.

    Raises:
        OSError: If the file cannot be read.
        CatalogDocumentError: If the content is not valid JSON for ``model``.
        UnsupportedCapsuleVersion: If a capsule carries an unknown version tag.
    """

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CatalogDocumentError(f"{path}: not valid UTF-8: {exc}", path=path) from exc
    try:
        return model.model_validate_json(content)
    except ValidationError as exc:
        raise CatalogDocumentError(f"{path}: failed to parse {model.__name__}: {exc}", path=path) from exc


__all__ = ["load_document"]
