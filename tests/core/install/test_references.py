"""Tests for package reference classification and dependency references."""

from __future__ import annotations

import logging

import pytest

from depot.core.install import PackageReference, ReferenceKind, dependency_reference


class TestParse:

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty(self, value: str | None) -> None:
        assert PackageReference.parse(value).kind is ReferenceKind.EMPTY

    @pytest.mark.parametrize(
        "value",
        ["http://registry.npmjs.org/easy/-/easy-0.0.1.tgz", "https://example.com/p.tgz"],
    )
    def test_url(self, value: str) -> None:
        ref = PackageReference.parse(value)
        assert ref.kind is ReferenceKind.URL
        assert ref.url == value

    @pytest.mark.parametrize("value", ["./local", "../pkg", "C:\\pkgs\\thing", "dir/pkg.tgz"])
    def test_local_path(self, value: str) -> None:
        ref = PackageReference.parse(value)
        assert ref.kind is ReferenceKind.LOCAL_PATH
        assert ref.url == ""

    def test_bare_name_means_latest(self) -> None:
        ref = PackageReference.parse("express")
        assert ref.kind is ReferenceKind.NAME
        assert (ref.name, ref.version_range) == ("express", "latest")

    def test_name_with_range(self) -> None:
        ref = PackageReference.parse("express@>= 3.0 < 3.2")
        assert (ref.name, ref.version_range) == ("express", ">= 3.0 < 3.2")

    def test_name_with_empty_range(self) -> None:
        assert PackageReference.parse("express@").version_range == "latest"

    def test_scoped_name(self) -> None:
        ref = PackageReference.parse("@types/node")
        assert ref.kind is ReferenceKind.NAME
        assert (ref.name, ref.version_range) == ("@types/node", "latest")

    def test_scoped_name_with_range(self) -> None:
        ref = PackageReference.parse("@types/node@>= 1.0 < 2.0")
        assert ref.kind is ReferenceKind.NAME
        assert (ref.name, ref.version_range) == ("@types/node", ">= 1.0 < 2.0")

    @pytest.mark.parametrize("value", ["@scope/a/b", "@scope\\pkg", "@/pkg"])
    def test_malformed_scoped_name_is_a_path(self, value: str) -> None:
        assert PackageReference.parse(value).kind is ReferenceKind.LOCAL_PATH

    def test_str(self) -> None:
        assert str(PackageReference.parse("a@1.x")) == "a@1.x"
        assert str(PackageReference.parse(None)) == "<local manifest>"


class TestDependencyReference:

    def test_usable_range_kept(self) -> None:
        ref = dependency_reference("a", "1.0.0")
        assert ref.kind is ReferenceKind.NAME
        assert (ref.name, ref.version_range) == ("a", "1.0.0")

    def test_shorthand_kept(self) -> None:
        assert dependency_reference("a", "2.x").version_range == "2.x"

    @pytest.mark.parametrize("bad", ["x", "*", "", "^1.0.0", "==1.0", None])
    def test_unusable_range_falls_back_to_latest(
        self, bad: str | None, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="depot.core.install.references"):
            ref = dependency_reference("b", bad)  # type: ignore[arg-type]
        assert (ref.name, ref.version_range) == ("b", "latest")
        assert "installing 'b@latest' instead" in caplog.text

    def test_url_range(self) -> None:
        ref = dependency_reference("c", "https://example.com/c-1.0.0.tgz")
        assert ref.kind is ReferenceKind.URL
        assert ref.url == "https://example.com/c-1.0.0.tgz"
