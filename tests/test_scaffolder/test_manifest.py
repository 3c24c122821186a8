"""Tests for the pubspec package-name lookup."""

from __future__ import annotations

from pathlib import Path

import pytest

from flutter_scaffold.scaffolder.errors import ManifestUnreadable
from flutter_scaffold.scaffolder.manifest import find_project_dir, read_package_name, resolve_package_name

pytestmark = pytest.mark.unit


def _write_pubspec(directory: Path, text: str) -> None:
    (directory / "pubspec.yaml").write_text(text, encoding="utf-8")


class TestReadPackageName:
    def test_reads_name(self, flutter_project: Path):
        assert read_package_name(flutter_project) == "shop_app"

    def test_first_name_line_wins(self, tmp_path: Path):
        _write_pubspec(tmp_path, "description: x\nname: first\nname: second\n")
        assert read_package_name(tmp_path) == "first"

    def test_indented_name_line_matches(self, tmp_path: Path):
        _write_pubspec(tmp_path, "  name:   spaced_out  \n")
        assert read_package_name(tmp_path) == "spaced_out"

    def test_quotes_and_comment_stripped(self, tmp_path: Path):
        _write_pubspec(tmp_path, "name: 'quoted_app' # the app\n")
        assert read_package_name(tmp_path) == "quoted_app"

    def test_custom_key_and_manifest(self, tmp_path: Path):
        (tmp_path / "meta.txt").write_text("module: my_module\n", encoding="utf-8")
        assert read_package_name(tmp_path, key="module", manifest="meta.txt") == "my_module"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ManifestUnreadable, match="Cannot read"):
            read_package_name(tmp_path)

    def test_no_name_line(self, tmp_path: Path):
        _write_pubspec(tmp_path, "description: nothing here\n")
        with pytest.raises(ManifestUnreadable, match="No 'name:' line"):
            read_package_name(tmp_path)

    def test_empty_value(self, tmp_path: Path):
        _write_pubspec(tmp_path, "name:\n")
        with pytest.raises(ManifestUnreadable, match="Empty"):
            read_package_name(tmp_path)


class TestResolvePackageName:
    def test_falls_back_to_default(self, tmp_path: Path):
        assert resolve_package_name(tmp_path) == "your_default_package"

    def test_no_project_dir(self):
        assert resolve_package_name(None, default="fallback") == "fallback"

    def test_reads_when_available(self, flutter_project: Path):
        assert resolve_package_name(flutter_project) == "shop_app"


class TestFindProjectDir:
    def test_walks_up(self, flutter_project: Path):
        assert find_project_dir(flutter_project / "lib" / "features") == flutter_project.resolve()

    def test_not_found(self, tmp_path: Path):
        assert find_project_dir(tmp_path, manifest="definitely_missing_manifest.yaml") is None
