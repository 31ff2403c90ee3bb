"""Tests for PackageMetadata mapping, manifest reading, and the installed index."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from depot.core.manifest import PackageMetadata, read_manifest, scan_installed
from depot.exceptions import ManifestError
from tests.helpers import write_manifest


class TestFromDocument:
    """Tolerant document-to-struct mapping."""

    def test_full_document(self) -> None:
        meta = PackageMetadata.from_document({
            "name": "express",
            "version": "3.0.0",
            "dependencies": {"connect": "2.x", "mime": "1.2.6"},
            "dist": {"tarball": "https://r/express/-/express-3.0.0.tgz"},
        })
        assert meta.name == "express"
        assert meta.version == "3.0.0"
        assert meta.dependencies == {"connect": "2.x", "mime": "1.2.6"}
        assert meta.tarball_url == "https://r/express/-/express-3.0.0.tgz"
        assert meta.label == "express@3.0.0"

    def test_dependency_order_preserved(self) -> None:
        meta = PackageMetadata.from_document({"dependencies": {"z": "1", "a": "2", "m": "3"}})
        assert list(meta.dependencies) == ["z", "a", "m"]

    def test_missing_fields_default_to_empty(self) -> None:
        meta = PackageMetadata.from_document({"name": "solo"})
        assert meta.version == ""
        assert meta.dependencies == {}
        assert meta.tarball_url == ""
        assert meta.label == "solo"

    def test_wrong_types_tolerated(self) -> None:
        meta = PackageMetadata.from_document({
            "name": 42,
            "version": ["1"],
            "dist": "nope",
            "dependencies": {"a": None, "b": 3, "c": "1.0.0"},
        })
        assert meta.name == ""
        assert meta.version == ""
        assert meta.tarball_url == ""
        assert meta.dependencies == {"a": "", "b": "", "c": "1.0.0"}

    def test_list_dependencies_ignored(self) -> None:
        assert PackageMetadata.from_document({"dependencies": ["a", "b"]}).dependencies == {}

    def test_non_dict_document(self) -> None:
        assert PackageMetadata.from_document(None) == PackageMetadata()
        assert PackageMetadata.from_document([1, 2]) == PackageMetadata()

    def test_raw_kept_but_not_compared(self) -> None:
        a = PackageMetadata.from_document({"name": "a", "extra": 1})
        b = PackageMetadata.from_document({"name": "a", "extra": 2})
        assert a == b
        assert a.raw["extra"] == 1


class TestReadManifest:
    """Reading package.json from disk."""

    def test_missing_returns_none(self, tmp_path: Path) -> None:
        assert read_manifest(tmp_path) is None

    def test_reads_manifest(self, tmp_path: Path) -> None:
        write_manifest(tmp_path, name="pkg", version="1.0.0")
        meta = read_manifest(tmp_path)
        assert meta is not None
        assert meta.label == "pkg@1.0.0"

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{not json")
        with pytest.raises(ManifestError) as exc_info:
            read_manifest(tmp_path)
        assert "package.json" in exc_info.value.path


class TestScanInstalled:
    """The installed-package index."""

    def test_missing_root(self, tmp_path: Path) -> None:
        assert scan_installed(tmp_path / "node_modules") == {}

    def test_indexes_by_manifest_name(self, tmp_path: Path) -> None:
        root = tmp_path / "node_modules"
        write_manifest(root / "b", name="b", version="2.0.0")
        write_manifest(root / "a", name="a", version="1.0.0")
        (root / "no-manifest").mkdir()
        write_manifest(root / "nameless", version="9.9.9")
        (root / "stray-file.txt").write_text("x")
        (root / ".tmp").mkdir()

        installed = scan_installed(root)
        assert list(installed) == ["a", "b"]
        assert installed["a"].version == "1.0.0"

    def test_scoped_packages(self, tmp_path: Path) -> None:
        root = tmp_path / "node_modules"
        write_manifest(root / "@scope" / "tool", name="@scope/tool", version="0.1.0")
        assert list(scan_installed(root)) == ["@scope/tool"]

    def test_unreadable_manifest_skipped(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = tmp_path / "node_modules"
        write_manifest(root / "good", name="good", version="1.0.0")
        (root / "broken").mkdir()
        (root / "broken" / "package.json").write_text('{"name": "bro')

        with caplog.at_level(logging.WARNING, logger="depot.core.manifest.io"):
            installed = scan_installed(root)

        assert list(installed) == ["good"]
        assert "broken" in caplog.text

    def test_rebuilt_each_call(self, tmp_path: Path) -> None:
        root = tmp_path / "node_modules"
        write_manifest(root / "a", name="a", version="1.0.0")
        assert scan_installed(root)["a"].version == "1.0.0"
        write_manifest(root / "a", name="a", version="1.1.0")
        assert scan_installed(root)["a"].version == "1.1.0"
