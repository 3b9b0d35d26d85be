"""
Hunk Builder - Group an edit script into context-windowed unified-diff hunks
"""

from __future__ import annotations

from collections.abc import Sequence

from models.diff import EditKind, EditOp, Hunk

DEFAULT_CONTEXT = 2


def build_hunks(ops: Sequence[EditOp], context: int = DEFAULT_CONTEXT) -> list[Hunk]:
    """Group changes with up to `context` equal lines on either side.

    Two changes separated by more than 2 * context equal lines start separate
    hunks, so padded hunks never overlap. No changes means no hunks.
    """
    context = max(0, context)
    change_indexes = [index for index, op in enumerate(ops) if op.kind != EditKind.EQUAL]
    if not change_indexes:
        return []

    # (first change, last change) per hunk
    groups: list[tuple[int, int]] = []
    first = last = change_indexes[0]
    for index in change_indexes[1:]:
        if index - last - 1 > 2 * context:
            groups.append((first, last))
            first = index
        last = index
    groups.append((first, last))

    hunks = []
    for first, last in groups:
        start = max(0, first - context)
        end = min(len(ops), last + context + 1)
        hunks.append(_make_hunk(ops[start:end]))
    return hunks


def _make_hunk(rows: Sequence[EditOp]) -> Hunk:
    old_numbers = [op.old_line_number for op in rows if op.old_line_number]
    new_numbers = [op.new_line_number for op in rows if op.new_line_number]
    return Hunk(
        old_start=old_numbers[0] if old_numbers else 1,
        old_count=sum(1 for op in rows if op.kind != EditKind.ADD),
        new_start=new_numbers[0] if new_numbers else 1,
        new_count=sum(1 for op in rows if op.kind != EditKind.REMOVE),
        rows=list(rows),
    )


def format_hunks(hunks: Sequence[Hunk]) -> list[str]:
    """Render hunks as unified-diff lines (headers followed by bodies)"""
    lines: list[str] = []
    for hunk in hunks:
        lines.append(hunk.header)
        lines.extend(hunk.body_lines())
    return lines
