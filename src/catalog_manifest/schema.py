"""Pydantic models describing the on-disk catalog documents."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Iterable, List, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import UnsupportedCapsuleVersion


MIRRORS_V1 = "catalogmirrors.v1"
MODULE_V1 = "catalogmodule.v1"

CapsuleT = TypeVar("CapsuleT", bound="_Capsule")


def _sorted_unique(values: Iterable[str]) -> List[str]:
    return sorted(set(values))


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def as_record(self) -> Dict[str, Any]:
        """Return the JSON-serialisable mapping written to disk."""

        return self.model_dump(by_alias=True)

    def __str__(self) -> str:
        return json.dumps(self.as_record(), indent=2, ensure_ascii=False)


class _Capsule(_Document):
    """Versioned envelope holding one payload keyed by its schema tag."""

    versions: ClassVar[Tuple[str, ...]] = ()

    @classmethod
    def wrap(cls: Type[CapsuleT], payload: BaseModel) -> CapsuleT:
        """Wrap ``payload`` in the newest version of this capsule."""

        return cls.model_validate({cls.versions[-1]: payload})

    @model_validator(mode="before")
    @classmethod
    def _check_version(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        unknown = sorted(key for key in data if key not in cls.versions)
        if unknown:
            raise UnsupportedCapsuleVersion(
                f"unknown {cls.__name__} version {unknown[0]!r}; expected one of {list(cls.versions)}"
            )
        if len(data) != 1:
            raise ValueError(f"capsule must hold exactly one version, got {len(data)}")
        return data


class CatalogMirrors(_Document):
    """Mirror locations keyed by ware id and by module and pack-type.

    Location sets are kept as sorted, de-duplicated lists so that the
    serialised form is stable.
    """

    by_ware: Dict[str, List[str]] = Field(default_factory=dict, alias="byWare")
    by_module: Dict[str, Dict[str, List[str]]] = Field(default_factory=dict, alias="byModule")

    @field_validator("by_ware")
    @classmethod
    def _normalise_by_ware(cls, value: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return {ware_id: _sorted_unique(locations) for ware_id, locations in value.items()}

    @field_validator("by_module")
    @classmethod
    def _normalise_by_module(
        cls, value: Dict[str, Dict[str, List[str]]]
    ) -> Dict[str, Dict[str, List[str]]]:
        return {
            module: {pack_type: _sorted_unique(locations) for pack_type, locations in inner.items()}
            for module, inner in value.items()
        }


class CatalogMirrorsCapsule(_Capsule):
    versions: ClassVar[Tuple[str, ...]] = (MIRRORS_V1,)

    v1: CatalogMirrors = Field(alias=MIRRORS_V1)

    @property
    def mirrors(self) -> CatalogMirrors:
        return self.v1


class CatalogModule(_Document):
    """A module descriptor: its name and the releases it declares."""

    name: str
    releases: Dict[str, str]
    metadata: Dict[str, str]


class CatalogModuleCapsule(_Capsule):
    versions: ClassVar[Tuple[str, ...]] = (MODULE_V1,)

    v1: CatalogModule = Field(alias=MODULE_V1)

    @property
    def module(self) -> CatalogModule:
        return self.v1


class CatalogRelease(_Document):
    """One release of a module, mapping item names to ware ids."""

    name: str = Field(alias="releaseName")
    items: Dict[str, str]
    metadata: Dict[str, str]


@dataclass(frozen=True, slots=True)
class ReleaseItem:
    """Fully qualified pointer to one item of one release of one module."""

    module: str
    release: str
    name: str

    def __str__(self) -> str:
        return f"{self.module}:{self.release}:{self.name}"
