"""
Word Aligner - Inline token-level diff for a removed/added line pair
"""

from __future__ import annotations

import re

from models.diff import EditKind, InlineSpan
from services.line_aligner import iter_alignment

_WHITESPACE_RUN = re.compile(r"(\s+)")


def tokenize_words(line: str) -> list[str]:
    """Split on whitespace runs, keeping each run as its own token"""
    return [token for token in _WHITESPACE_RUN.split(line) if token]


def align_words(old_line: str, new_line: str) -> tuple[list[InlineSpan], list[InlineSpan]]:
    """Mark which tokens of each line are shared (in order) with the other.

    Joining the text of the left spans gives back old_line exactly; the
    right spans give back new_line.
    """
    left_tokens = tokenize_words(old_line)
    right_tokens = tokenize_words(new_line)
    left: list[tuple[str, bool]] = []
    right: list[tuple[str, bool]] = []

    for kind, i, j in iter_alignment(left_tokens, right_tokens):
        if kind == EditKind.EQUAL:
            left.append((left_tokens[i], False))
            right.append((right_tokens[j], False))
        elif kind == EditKind.REMOVE:
            left.append((left_tokens[i], True))
        else:
            right.append((right_tokens[j], True))

    return _merge_runs(left), _merge_runs(right)


def _merge_runs(tokens: list[tuple[str, bool]]) -> list[InlineSpan]:
    """Collapse consecutive tokens with the same changed flag"""
    spans: list[InlineSpan] = []
    buffer: list[str] = []
    current: bool | None = None
    for text, changed in tokens:
        if current is not None and changed != current:
            spans.append(InlineSpan(text="".join(buffer), changed=current))
            buffer = []
        buffer.append(text)
        current = changed
    if buffer:
        spans.append(InlineSpan(text="".join(buffer), changed=bool(current)))
    return spans
