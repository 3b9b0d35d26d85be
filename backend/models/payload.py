"""Tool-call payload data models"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class PatchAction(str, Enum):
    """Per-file directive of the apply-patch envelope"""

    UPDATE = "update"
    ADD = "add"
    DELETE = "delete"
    MOVE = "move"


class PatchDirective(BaseModel):
    """A parsed `*** <Action> File: <path>` or `*** Move to: <path>` line"""

    model_config = ConfigDict(frozen=True)

    action: PatchAction
    path: str


class NormalizedPatch(BaseModel):
    """Canonical unified diff text plus the first file path named by the patch"""

    model_config = ConfigDict(frozen=True)

    diff_text: str | None = None
    primary_path: str | None = None


class ExtractedToolPayload(BaseModel):
    """Normalized fields of a single tool-call record"""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    pretty_name: str | None = None
    command: str | None = None
    file_path: str | None = None
    old_text: str | None = None
    new_text: str | None = None
    diff_text: str | None = None
    is_write: bool = False
    input_record: dict[str, Any] | None = None
    raw_record: dict[str, Any]
