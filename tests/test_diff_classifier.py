"""
Tests for services.diff_classifier - numbered rows from unified diff text
"""

from __future__ import annotations

from models.diff import RowKind
from services.diff_classifier import (
    classify_diff_rows,
    is_likely_diff,
    parse_hunk_start,
)
from services.diff_generator import DiffGenerator
from services.patch_normalizer import normalize_patch

from conftest import kinds


def _numbers(rows) -> list[tuple[int | None, int | None]]:
    return [(row.old_line_number, row.new_line_number) for row in rows]


def test_paired_edit_rows_carry_inline_spans():
    text = "@@ -1,3 +1,3 @@\n a\n-b\n+x\n c"
    rows = classify_diff_rows(text)

    assert kinds(rows) == ["meta", "context", "remove", "add", "context"]
    assert _numbers(rows) == [(None, None), (1, 1), (2, None), (None, 2), (3, 3)]
    assert [row.content for row in rows] == ["@@ -1,3 +1,3 @@", "a", "b", "x", "c"]
    assert [(span.text, span.changed) for span in rows[2].inline] == [("b", True)]
    assert [(span.text, span.changed) for span in rows[3].inline] == [("x", True)]


def test_lone_add_and_remove_rows():
    rows = classify_diff_rows("@@ -5,2 +5,2 @@\n-gone\n ctx\n+new")
    assert kinds(rows) == ["meta", "remove", "context", "add"]
    assert _numbers(rows)[1:] == [(5, None), (6, 5), (None, 6)]
    assert rows[1].inline is None
    assert rows[3].inline is None


def test_only_adjacent_pair_is_matched():
    rows = classify_diff_rows("@@ -1,2 +1,2 @@\n-a\n-b\n+c\n+d")
    assert kinds(rows) == ["meta", "remove", "remove", "add", "add"]
    assert rows[1].inline is None
    assert rows[2].inline is not None
    assert rows[3].inline is not None
    assert rows[4].inline is None
    assert _numbers(rows)[1:] == [(1, None), (2, None), (None, 1), (None, 2)]


def test_headers_are_meta_without_numbers():
    text = "\n".join(
        [
            "diff --git a/x b/x",
            "index 123..456 100644",
            "--- a/x",
            "+++ b/x",
            "@@ -10,1 +20,1 @@",
            " keep",
        ]
    )
    rows = classify_diff_rows(text)
    assert kinds(rows) == ["meta"] * 5 + ["context"]
    assert _numbers(rows)[-1] == (10, 20)


def test_cursor_resets_per_hunk():
    rows = classify_diff_rows("@@ -1 +1 @@\n a\n@@ -40,1 +42,1 @@\n b")
    assert _numbers(rows) == [(None, None), (1, 1), (None, None), (40, 42)]


def test_malformed_header_keeps_previous_cursor():
    rows = classify_diff_rows("@@ -3 +4 @@\n a\n@@ bogus @@\n b")
    assert rows[2].kind == RowKind.META
    assert _numbers(rows)[3] == (4, 5)


def test_body_without_header_starts_at_line_one():
    rows = classify_diff_rows("+first\n+second")
    assert _numbers(rows) == [(None, 1), (None, 2)]


def test_no_newline_marker_is_meta():
    rows = classify_diff_rows("@@ -1 +1 @@\n-a\n\\ No newline at end of file\n+b")
    assert kinds(rows) == ["meta", "remove", "meta", "add"]
    assert _numbers(rows)[3] == (None, 1)


def test_trailing_newline_and_empty_text():
    assert classify_diff_rows("") == []
    rows = classify_diff_rows("@@ -1 +1 @@\n a\n")
    assert kinds(rows) == ["meta", "context"]


def test_context_line_strips_single_space():
    rows = classify_diff_rows("@@ -1 +1 @@\n   indented\nbare")
    assert rows[1].content == "  indented"
    assert rows[2].content == "bare"
    assert rows[2].kind == RowKind.CONTEXT


def test_generated_and_normalized_diffs_number_every_body_row():
    generated = DiffGenerator().generate_diff("a\nb\nc\nd", "a\nx\nc\nd\ne", "f.txt")
    normalized = normalize_patch(
        "*** Begin Patch\n*** Update File: f.txt\n@@\n-a\n+b\n c\n*** End Patch"
    )
    for text in (generated.unified_diff, normalized.diff_text):
        for row in classify_diff_rows(text):
            if row.kind != RowKind.META:
                assert row.old_line_number is not None or row.new_line_number is not None


def test_parse_hunk_start():
    assert parse_hunk_start("@@ -12,3 +15,4 @@ def f():") == (12, 15)
    assert parse_hunk_start("@@ -1 +1 @@") == (1, 1)
    assert parse_hunk_start("@@ nope @@") is None


def test_is_likely_diff():
    assert is_likely_diff("diff", "anything")
    assert is_likely_diff("Patch", "anything")
    assert is_likely_diff("", "@@ -1 +1 @@")
    assert is_likely_diff("", "-a\n+b\n c\n d")
    assert not is_likely_diff("", "- bullet\n- list")
    assert not is_likely_diff("", "")
