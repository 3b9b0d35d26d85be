"""Render mode data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .diff import DiffRow


class ToolCategory(str, Enum):
    """Message categories that carry tool-call records"""

    TOOL_USE = "tool_use"
    TOOL_EDIT = "tool_edit"
    TOOL_RESULT = "tool_result"


class ViewKind(str, Enum):
    """Which view a rendered tool-call card uses"""

    DIFF = "diff"
    WRITTEN_CONTENT = "written_content"
    COMMAND = "command"
    RESULT = "result"
    RAW = "raw"


class RenderedToolCall(BaseModel):
    """Structured card for one tool-call record"""

    view: ViewKind
    title: str | None = None  # Pretty tool name
    file_path: str | None = None
    command: str | None = None
    arguments_json: str | None = None
    metadata_json: str | None = None
    diff_text: str | None = None
    rows: list[DiffRow] = []
    content: str | None = None  # Raw, written or output text
    language: str | None = None
    notice: str | None = None


class RenderToolCallRequest(BaseModel):
    """Request to render one tool-call record"""

    text: str
    category: ToolCategory = ToolCategory.TOOL_USE


class RenderBatchRequest(BaseModel):
    """Request to render a page of tool-call records"""

    records: list[RenderToolCallRequest] = []


class DiffRequest(BaseModel):
    """Request to diff a before/after text pair"""

    old_text: str
    new_text: str
    file_path: str | None = None
    context_lines: int | None = Field(default=None, ge=0)


class RowsRequest(BaseModel):
    """Request to classify canonical unified diff text"""

    diff_text: str


class RowsResponse(BaseModel):
    """Classified diff rows"""

    rows: list[DiffRow]


class PatchRequest(BaseModel):
    """Request to normalize patch text"""

    text: str
    operation_hint: str = ""


class StreamEvent(BaseModel):
    """SSE stream event"""

    type: str  # "card", "done", "error"
    index: int | None = None
    card: RenderedToolCall | None = None
    done: bool = False
    error: str | None = None
