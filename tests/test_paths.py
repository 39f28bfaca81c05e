"""Tests for request path validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from gridedit.exceptions import InvalidPathError
from gridedit.paths import index_file_for, node_dir_for, resolve_content_path


class TestResolveContentPath:
    """Tests for resolve_content_path function."""

    def test_resolves_inside_content(self, site_root: Path) -> None:
        path = resolve_content_path("content/lab1/exp1/tab1/row1/cell2", site_root=site_root)

        assert path == site_root.resolve() / "content" / "lab1" / "exp1" / "tab1" / "row1" / "cell2"

    def test_accepts_backslashes_and_whitespace(self, site_root: Path) -> None:
        path = resolve_content_path("  content\\lab1\\tab1\\row1 ", site_root=site_root)

        assert path == site_root.resolve() / "content" / "lab1" / "tab1" / "row1"

    def test_custom_prefix(self, site_root: Path) -> None:
        path = resolve_content_path("pages/tab1", site_root=site_root, prefix="pages")

        assert path == site_root.resolve() / "pages" / "tab1"

    @pytest.mark.parametrize(
        "file_path",
        [
            "",
            "   ",
            "/etc/passwd",
            "static/js/editor.js",
            "content",
            "content/",
            "contents/lab1",
            "content/../secret.md",
            "content/lab1/../../secret.md",
        ],
    )
    def test_rejects_paths_outside_content(self, site_root: Path, file_path: str) -> None:
        with pytest.raises(InvalidPathError):
            resolve_content_path(file_path, site_root=site_root)

    def test_rejects_symlink_escape(self, site_root: Path, tmp_path_factory) -> None:
        outside = tmp_path_factory.mktemp("outside")
        (site_root / "content" / "link").symlink_to(outside, target_is_directory=True)

        with pytest.raises(InvalidPathError):
            resolve_content_path("content/link/row1", site_root=site_root)


class TestNodePaths:
    """Tests for node_dir_for and index_file_for."""

    def test_node_dir_for_index_file(self, tmp_path: Path) -> None:
        assert node_dir_for(tmp_path / "row1" / "cell2" / "_index.md") == tmp_path / "row1" / "cell2"

    def test_node_dir_for_directory(self, tmp_path: Path) -> None:
        assert node_dir_for(tmp_path / "row1" / "cell2") == tmp_path / "row1" / "cell2"

    def test_index_file_for_directory(self, tmp_path: Path) -> None:
        assert index_file_for(tmp_path / "cell2") == tmp_path / "cell2" / "_index.md"

    def test_index_file_for_file(self, tmp_path: Path) -> None:
        assert index_file_for(tmp_path / "cell2" / "_index.md") == tmp_path / "cell2" / "_index.md"
