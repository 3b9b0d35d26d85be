"""
Tests for services.diff_generator - text pairs to canonical unified diff
"""

from __future__ import annotations

from models.diff import RowKind
from services.diff_generator import EMPTY_HUNK_HEADER, DiffGenerator

from conftest import kinds


def test_generate_diff_for_single_line_edit():
    result = DiffGenerator().generate_diff("a\nb\nc", "a\nx\nc", "src/f.py")

    assert result.file_path == "src/f.py"
    assert result.unified_diff.split("\n") == [
        "--- a/src/f.py",
        "+++ b/src/f.py",
        "@@ -1,3 +1,3 @@",
        " a",
        "-b",
        "+x",
        " c",
    ]
    assert len(result.hunks) == 1
    assert kinds(result.rows) == ["meta", "meta", "meta", "context", "remove", "add", "context"]
    assert all(span.changed for span in result.rows[4].inline)


def test_identical_text_gets_placeholder_header():
    result = DiffGenerator().generate_diff("same\ntext", "same\ntext")

    assert result.hunks == []
    assert result.unified_diff.split("\n") == ["--- a/file", "+++ b/file", EMPTY_HUNK_HEADER]
    assert all(row.kind == RowKind.META for row in result.rows)


def test_default_label_and_context_override():
    generator = DiffGenerator(context_lines=0, default_file_label="untitled")
    result = generator.generate_diff("a\nb\nc", "a\nB\nc")
    assert result.unified_diff.startswith("--- a/untitled\n+++ b/untitled\n@@ -2,1 +2,1 @@")

    wider = generator.generate_diff("a\nb\nc", "a\nB\nc", context_lines=1)
    assert "@@ -1,3 +1,3 @@" in wider.unified_diff


def test_creating_file_from_empty_text():
    result = DiffGenerator().generate_diff("", "hello\nworld", "new.txt")
    assert "@@ -1,0 +1,2 @@" in result.unified_diff
    assert [row.new_line_number for row in result.rows if row.kind == RowKind.ADD] == [1, 2]


def test_crlf_text_matches_lf_text():
    result = DiffGenerator().generate_diff("a\r\nb", "a\nb")
    assert result.hunks == []
