"""
Diff Row Classifier - Turn canonical unified diff text into numbered display rows
"""

from __future__ import annotations

import re

from models.diff import DiffRow, RowKind
from services.line_aligner import split_lines
from services.word_aligner import align_words

HUNK_HEADER = re.compile(r"@@ -(\d+)(,\d+)? \+(\d+)(,\d+)? @@")

_META_PREFIXES = ("@@", "diff --git", "index ", "--- ", "+++ ", "\\ ")


def parse_hunk_start(line: str) -> tuple[int, int] | None:
    """(old start, new start) from a hunk header, or None when malformed"""
    match = HUNK_HEADER.search(line)
    if not match:
        return None
    return int(match.group(1)), int(match.group(3))


def is_added_line(line: str) -> bool:
    return line.startswith("+") and not line.startswith("+++ ")


def is_removed_line(line: str) -> bool:
    return line.startswith("-") and not line.startswith("--- ")


def is_meta_line(line: str) -> bool:
    return line.startswith(_META_PREFIXES)


def is_likely_diff(language: str, text: str) -> bool:
    """Guess whether a code block holds diff content"""
    language = language.strip().lower()
    if "diff" in language or language == "patch":
        return True
    lines = [line for line in split_lines(text) if line]
    if not lines:
        return False
    if any(line.startswith(("@@", "diff --git", "--- ", "+++ ")) for line in lines):
        return True

    added = sum(1 for line in lines if is_added_line(line))
    removed = sum(1 for line in lines if is_removed_line(line))
    context = sum(1 for line in lines if line.startswith(" "))
    return added > 0 and removed > 0 and added + removed + context >= 4


def classify_diff_rows(diff_text: str) -> list[DiffRow]:
    """Classify each diff line and track old/new line numbers.

    A removed line directly followed by an added line is treated as one
    edited line and both rows carry inline word spans.
    """
    lines = split_lines(diff_text)
    if lines and lines[-1] == "":
        lines.pop()

    rows: list[DiffRow] = []
    old_line = new_line = 1
    index = 0
    while index < len(lines):
        line = lines[index]

        if is_meta_line(line):
            if line.startswith("@@"):
                start = parse_hunk_start(line)
                if start is not None:
                    old_line, new_line = start
            rows.append(DiffRow(content=line, kind=RowKind.META))
            index += 1
            continue

        next_line = lines[index + 1] if index + 1 < len(lines) else ""
        if is_removed_line(line) and is_added_line(next_line):
            left, right = align_words(line[1:], next_line[1:])
            rows.append(
                DiffRow(
                    old_line_number=old_line,
                    content=line[1:],
                    kind=RowKind.REMOVE,
                    inline=left,
                )
            )
            rows.append(
                DiffRow(
                    new_line_number=new_line,
                    content=next_line[1:],
                    kind=RowKind.ADD,
                    inline=right,
                )
            )
            old_line += 1
            new_line += 1
            index += 2
            continue

        if is_removed_line(line):
            rows.append(DiffRow(old_line_number=old_line, content=line[1:], kind=RowKind.REMOVE))
            old_line += 1
        elif is_added_line(line):
            rows.append(DiffRow(new_line_number=new_line, content=line[1:], kind=RowKind.ADD))
            new_line += 1
        else:
            rows.append(
                DiffRow(
                    old_line_number=old_line,
                    new_line_number=new_line,
                    content=line[1:] if line.startswith(" ") else line,
                    kind=RowKind.CONTEXT,
                )
            )
            old_line += 1
            new_line += 1
        index += 1

    return rows
