"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class EditKind(str, Enum):
    """Kind of a single line-level edit operation"""

    EQUAL = "equal"
    REMOVE = "remove"
    ADD = "add"


class RowKind(str, Enum):
    """Display classification of a diff row"""

    CONTEXT = "context"
    ADD = "add"
    REMOVE = "remove"
    META = "meta"


class EditOp(BaseModel):
    """One line of an edit script"""

    model_config = ConfigDict(frozen=True)

    kind: EditKind
    text: str
    old_line_number: int | None = None  # set for equal/remove
    new_line_number: int | None = None  # set for equal/add

    @property
    def prefix(self) -> str:
        if self.kind == EditKind.REMOVE:
            return "-"
        if self.kind == EditKind.ADD:
            return "+"
        return " "


class Hunk(BaseModel):
    """A context-padded block of a unified diff"""

    model_config = ConfigDict(frozen=True)

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    rows: list[EditOp]

    @property
    def header(self) -> str:
        return f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"

    def body_lines(self) -> list[str]:
        return [f"{op.prefix}{op.text}" for op in self.rows]


class InlineSpan(BaseModel):
    """A run of word tokens inside a changed line"""

    model_config = ConfigDict(frozen=True)

    text: str
    changed: bool


class DiffRow(BaseModel):
    """A classified diff line ready for display"""

    model_config = ConfigDict(frozen=True)

    old_line_number: int | None = None
    new_line_number: int | None = None
    content: str
    kind: RowKind
    inline: list[InlineSpan] | None = None


class DiffResult(BaseModel):
    """Complete diff result for a text pair"""

    file_path: str
    hunks: list[Hunk]
    unified_diff: str  # Standard unified diff format
    rows: list[DiffRow]
