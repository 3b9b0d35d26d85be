"""Models module - Pydantic data models"""

from .diff import DiffResult, DiffRow, EditKind, EditOp, Hunk, InlineSpan, RowKind
from .payload import ExtractedToolPayload, NormalizedPatch, PatchAction, PatchDirective
from .render import (
    DiffRequest,
    PatchRequest,
    RenderBatchRequest,
    RenderedToolCall,
    RenderToolCallRequest,
    RowsRequest,
    RowsResponse,
    StreamEvent,
    ToolCategory,
    ViewKind,
)

__all__ = [
    # Diff models
    "DiffResult",
    "DiffRow",
    "EditKind",
    "EditOp",
    "Hunk",
    "InlineSpan",
    "RowKind",
    # Payload models
    "ExtractedToolPayload",
    "NormalizedPatch",
    "PatchAction",
    "PatchDirective",
    # Render models
    "DiffRequest",
    "PatchRequest",
    "RenderBatchRequest",
    "RenderedToolCall",
    "RenderToolCallRequest",
    "RowsRequest",
    "RowsResponse",
    "StreamEvent",
    "ToolCategory",
    "ViewKind",
]
