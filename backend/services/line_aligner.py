"""
Line Aligner - LCS alignment of two line sequences into an edit script
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence

from models.diff import EditKind, EditOp

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split text on \\n or \\r\\n; empty text is an empty file"""
    if not text:
        return []
    return _LINE_BREAK.split(text)


def lcs_table(left: Sequence[str], right: Sequence[str]) -> list[list[int]]:
    """Suffix LCS lengths: table[i][j] is the LCS length of left[i:] and right[j:].

    Costs O(len(left) * len(right)) time and memory, so callers bound their input.
    """
    table = [[0] * (len(right) + 1) for _ in range(len(left) + 1)]
    for i in range(len(left) - 1, -1, -1):
        row = table[i]
        below = table[i + 1]
        for j in range(len(right) - 1, -1, -1):
            if left[i] == right[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])
    return table


def iter_alignment(
    left: Sequence[str],
    right: Sequence[str],
) -> Iterator[tuple[EditKind, int | None, int | None]]:
    """Walk the LCS table forward, yielding (kind, left_index, right_index).

    On a mismatch the side with the longer remaining LCS is advanced; ties
    advance the left side first, so removals come before additions.
    """
    table = lcs_table(left, right)
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] == right[j]:
            yield EditKind.EQUAL, i, j
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            yield EditKind.REMOVE, i, None
            i += 1
        else:
            yield EditKind.ADD, None, j
            j += 1

    for rest in range(i, len(left)):
        yield EditKind.REMOVE, rest, None
    for rest in range(j, len(right)):
        yield EditKind.ADD, None, rest


def align_lines(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[EditOp]:
    """Build a classified edit script covering every old and new line once"""
    ops: list[EditOp] = []
    for kind, i, j in iter_alignment(old_lines, new_lines):
        if kind == EditKind.EQUAL:
            ops.append(
                EditOp(
                    kind=kind,
                    text=old_lines[i],
                    old_line_number=i + 1,  # 1-indexed
                    new_line_number=j + 1,
                )
            )
        elif kind == EditKind.REMOVE:
            ops.append(EditOp(kind=kind, text=old_lines[i], old_line_number=i + 1))
        else:
            ops.append(EditOp(kind=kind, text=new_lines[j], new_line_number=j + 1))
    return ops
