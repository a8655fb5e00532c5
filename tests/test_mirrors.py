from __future__ import annotations

import logging

import pytest

from catalog_manifest import mirrors
from catalog_manifest.errors import UnsupportedCapsuleVersion
from catalog_manifest.schema import CatalogMirrors
from catalog_manifest.utils.config import CatalogConfig


def test_merge_unions_location_sets() -> None:
    left = CatalogMirrors(by_ware={"foo": ["a", "d"]}, by_module={"foo": {"bar": ["y", "b"]}})
    right = CatalogMirrors(
        by_ware={"foo": ["c", "e", "d"], "bar": ["b"]},
        by_module={"foo": {"bar": ["x", "a"]}, "bar": {"grill": ["m", "o"]}},
    )
    merged = mirrors.merge_mirrors(left, right)
    assert merged.by_ware == {"bar": ["b"], "foo": ["a", "c", "d", "e"]}
    assert merged.by_module == {
        "bar": {"grill": ["m", "o"]},
        "foo": {"bar": ["a", "b", "x", "y"]},
    }


def test_merge_skips_empty_module_entries() -> None:
    left = CatalogMirrors(by_module={"foo": {}})
    right = CatalogMirrors(by_module={"bar": {"tar": []}})
    merged = mirrors.merge_mirrors(left, right)
    assert merged.by_module == {"bar": {"tar": []}}


def test_merge_leaves_operands_untouched() -> None:
    left = CatalogMirrors(by_ware={"tar:abc": ["a"]})
    right = CatalogMirrors(by_ware={"tar:abc": ["b"]})
    mirrors.merge_mirrors(left, right)
    assert left.by_ware == {"tar:abc": ["a"]}
    assert right.by_ware == {"tar:abc": ["b"]}


def test_collect_merges_nested_fragments(catalog) -> None:
    catalog.mirrors(by_ware={"tar:abcdefg": ["https://example.com/a.tgz"]})
    catalog.mirrors(
        "example.org/foo",
        by_ware={"tar:abcdefg": ["https://mirror.example.com/a.tgz"]},
        by_module={"example.org/foo": {"tar": ["ca+https://wares.example.com"]}},
    )
    catalog.mirrors("deep/er/still", by_module={"example.org/foo": {"tar": ["ca+https://other.example.com"]}})

    capsule = mirrors.collect(catalog.root)

    assert capsule.mirrors.by_ware == {
        "tar:abcdefg": ["https://example.com/a.tgz", "https://mirror.example.com/a.tgz"]
    }
    assert capsule.mirrors.by_module == {
        "example.org/foo": {"tar": ["ca+https://other.example.com", "ca+https://wares.example.com"]}
    }


def test_collect_ignores_other_files(catalog) -> None:
    catalog.write_json("mirrors.json", {"catalogmirrors.v1": {"byWare": {"tar:x": ["y"]}}})
    assert mirrors.collect(catalog.root).mirrors == CatalogMirrors()


def test_collect_skips_unparseable_fragment(catalog, caplog: pytest.LogCaptureFixture) -> None:
    broken = catalog.root / "broken" / "_mirrors.json"
    broken.parent.mkdir()
    broken.write_text("{not json", encoding="utf-8")
    catalog.mirrors("good", by_ware={"tar:abcdefg": ["https://example.com/a.tgz"]})

    with caplog.at_level(logging.WARNING, logger="catalog_manifest.mirrors"):
        capsule = mirrors.collect(catalog.root)

    assert capsule.mirrors.by_ware == {"tar:abcdefg": ["https://example.com/a.tgz"]}
    assert "Skipping unreadable mirrors file" in caplog.text


def test_collect_rejects_unknown_fragment_version(catalog) -> None:
    catalog.write_json("sub/_mirrors.json", {"catalogmirrors.v7": {}})
    with pytest.raises(UnsupportedCapsuleVersion):
        mirrors.collect(catalog.root)


def test_collect_missing_root_is_fatal(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        mirrors.collect(tmp_path / "absent")


def test_collect_honours_configured_file_name(catalog) -> None:
    catalog.write_json("mirrors.json", {"catalogmirrors.v1": {"byWare": {"tar:x": ["y"]}}})
    capsule = mirrors.collect(catalog.root, CatalogConfig(mirrors_file_name="mirrors.json"))
    assert capsule.mirrors.by_ware == {"tar:x": ["y"]}


def test_collected_capsule_serialises_with_version_tag(catalog) -> None:
    catalog.mirrors(by_ware={"tar:abcdefg": ["https://example.com/a.tgz"]})
    record = mirrors.collect(catalog.root).as_record()
    assert record == {
        "catalogmirrors.v1": {
            "byWare": {"tar:abcdefg": ["https://example.com/a.tgz"]},
            "byModule": {},
        }
    }


def test_collect_skips_fragment_with_invalid_encoding(catalog, caplog: pytest.LogCaptureFixture) -> None:
    (catalog.root / "_mirrors.json").write_bytes(b"\xff\xfe{}")
    with caplog.at_level(logging.WARNING, logger="catalog_manifest.mirrors"):
        assert mirrors.collect(catalog.root).mirrors == CatalogMirrors()
    assert "not valid UTF-8" in caplog.text


def test_collect_rejects_field_name_as_version_tag(catalog) -> None:
    catalog.write_json("sub/_mirrors.json", {"v1": {"byWare": {"tar:abcdefg": ["https://x/y"]}}})
    with pytest.raises(UnsupportedCapsuleVersion):
        mirrors.collect(catalog.root)
