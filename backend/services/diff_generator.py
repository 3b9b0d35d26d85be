"""
Diff Generator Service - Generate unified diffs for before/after text pairs
"""

from __future__ import annotations

from models.diff import DiffResult
from services.diff_classifier import classify_diff_rows
from services.hunk_builder import DEFAULT_CONTEXT, build_hunks, format_hunks
from services.line_aligner import align_lines, split_lines

EMPTY_HUNK_HEADER = "@@ -1,0 +1,0 @@"


class DiffGenerator:
    """Generate unified diffs for tool-call edits"""

    def __init__(self, context_lines: int = DEFAULT_CONTEXT, default_file_label: str = "file"):
        self.context_lines = context_lines
        self.default_file_label = default_file_label

    def generate_diff(
        self,
        old_text: str,
        new_text: str,
        file_path: str | None = None,
        context_lines: int | None = None,
    ) -> DiffResult:
        """Generate structured diff from original and new content"""
        ops = align_lines(split_lines(old_text), split_lines(new_text))
        context = self.context_lines if context_lines is None else context_lines
        hunks = build_hunks(ops, context)

        header_file = file_path or self.default_file_label
        output = [f"--- a/{header_file}", f"+++ b/{header_file}"]
        if hunks:
            output.extend(format_hunks(hunks))
        else:
            # Identical inputs still get a hunk header so viewers show an empty diff
            output.append(EMPTY_HUNK_HEADER)
        unified = "\n".join(output)

        return DiffResult(
            file_path=header_file,
            hunks=hunks,
            unified_diff=unified,
            rows=classify_diff_rows(unified),
        )
