"""
Tests for services.line_aligner - LCS edit scripts over lines
"""

from __future__ import annotations

import pytest

from models.diff import EditKind
from services.line_aligner import align_lines, lcs_table, split_lines


def _replay(ops, keep: set[EditKind]) -> list[str]:
    return [op.text for op in ops if op.kind in keep]


@pytest.mark.parametrize(
    "old, new",
    [
        ([], []),
        (["a"], []),
        ([], ["a"]),
        (["a", "b", "c"], ["a", "x", "c"]),
        (["a", "b", "c", "d"], ["d", "c", "b", "a"]),
        (["x", "x", "y"], ["x", "y", "x"]),
        (["", "", "a"], ["a", ""]),
    ],
)
def test_replay_reconstructs_both_sides(old, new):
    ops = align_lines(old, new)
    assert _replay(ops, {EditKind.EQUAL, EditKind.REMOVE}) == old
    assert _replay(ops, {EditKind.EQUAL, EditKind.ADD}) == new


def test_empty_inputs_give_empty_script():
    assert align_lines([], []) == []


def test_only_old_gives_single_remove():
    ops = align_lines(["a"], [])
    assert len(ops) == 1
    assert ops[0].kind == EditKind.REMOVE
    assert ops[0].text == "a"
    assert ops[0].old_line_number == 1
    assert ops[0].new_line_number is None


def test_only_new_gives_adds_with_new_numbers():
    ops = align_lines([], ["a", "b"])
    assert [op.kind for op in ops] == [EditKind.ADD, EditKind.ADD]
    assert [op.new_line_number for op in ops] == [1, 2]
    assert all(op.old_line_number is None for op in ops)


def test_replacement_prefers_remove_before_add():
    ops = align_lines(["a", "b", "c"], ["a", "x", "c"])
    assert [(op.kind, op.text) for op in ops] == [
        (EditKind.EQUAL, "a"),
        (EditKind.REMOVE, "b"),
        (EditKind.ADD, "x"),
        (EditKind.EQUAL, "c"),
    ]


def test_line_numbers_strictly_increase_per_side():
    ops = align_lines(["a", "b", "c", "d", "e"], ["b", "c", "x", "e", "f"])
    old_numbers = [op.old_line_number for op in ops if op.kind != EditKind.ADD]
    new_numbers = [op.new_line_number for op in ops if op.kind != EditKind.REMOVE]
    assert old_numbers == list(range(1, 6))
    assert new_numbers == list(range(1, 6))


def test_matching_is_exact():
    ops = align_lines(["a "], ["a"])
    assert [op.kind for op in ops] == [EditKind.REMOVE, EditKind.ADD]


def test_lcs_table_corner_holds_lcs_length():
    table = lcs_table(["a", "b", "c", "d"], ["b", "d", "e"])
    assert table[0][0] == 2
    assert table[4][3] == 0


def test_split_lines_handles_crlf_and_empty():
    assert split_lines("a\r\nb\nc") == ["a", "b", "c"]
    assert split_lines("") == []
    assert split_lines("a\n") == ["a", ""]
