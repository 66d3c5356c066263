"""Tests for whisker.export.writer — output mapping and writing."""

from __future__ import annotations

from pathlib import Path

import pytest

from whisker.export.writer import route_to_filepath, write_html


class TestRouteToFilepath:
    """route_to_filepath — clean URL convention."""

    def test_root(self, tmp_path: Path) -> None:
        assert route_to_filepath("/", tmp_path) == tmp_path / "index.html"

    def test_simple(self, tmp_path: Path) -> None:
        assert route_to_filepath("/about", tmp_path) == tmp_path / "about" / "index.html"

    def test_trailing_slash_collides(self, tmp_path: Path) -> None:
        assert route_to_filepath("/about/", tmp_path) == route_to_filepath("/about", tmp_path)

    def test_nested(self, tmp_path: Path) -> None:
        assert route_to_filepath("/docs/intro", tmp_path) == (
            tmp_path / "docs" / "intro" / "index.html"
        )

    def test_empty_route(self, tmp_path: Path) -> None:
        assert route_to_filepath("", tmp_path) == tmp_path / "index.html"


class TestWriteHtml:
    """write_html — UTF-8 write with directory creation."""

    def test_writes_file(self, tmp_path: Path) -> None:
        filepath = tmp_path / "page" / "index.html"
        size = write_html(filepath, "<p>héllo</p>")
        assert filepath.read_text(encoding="utf-8") == "<p>héllo</p>"
        assert size == len("<p>héllo</p>".encode())

    def test_creates_parent_dirs(self, tmp_path: Path) -> None:
        filepath = tmp_path / "deep" / "nested" / "dir" / "index.html"
        write_html(filepath, "content")
        assert filepath.exists()

    def test_replaces_existing(self, tmp_path: Path) -> None:
        filepath = tmp_path / "index.html"
        filepath.write_text("a much longer previous page")
        write_html(filepath, "new")
        assert filepath.read_text() == "new"

    def test_filesystem_error_propagates(self, tmp_path: Path) -> None:
        blocker = tmp_path / "about"
        blocker.write_text("a file where a directory should be")
        with pytest.raises(OSError):
            write_html(blocker / "index.html", "x")
