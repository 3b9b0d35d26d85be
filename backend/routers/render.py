"""Render mode API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from sse_starlette.sse import EventSourceResponse

from models.diff import DiffResult
from models.payload import NormalizedPatch
from models.render import (
    DiffRequest,
    PatchRequest,
    RenderBatchRequest,
    RenderedToolCall,
    RenderToolCallRequest,
    RowsRequest,
    RowsResponse,
)
from services.config_manager import ConfigManager
from services.diff_classifier import classify_diff_rows
from services.diff_generator import DiffGenerator
from services.patch_normalizer import normalize_patch
from services.tool_renderer import ToolCallRenderer

router = APIRouter()


def get_renderer() -> ToolCallRenderer:
    """Renderer bound to the current render settings"""
    settings = ConfigManager.get_instance().render_settings()
    return ToolCallRenderer(settings)


@router.post("/tool-call", response_model=RenderedToolCall)
async def render_tool_call(request: RenderToolCallRequest) -> RenderedToolCall:
    """Render a single tool-call record"""
    return get_renderer().render(request.text, request.category)


@router.post("/diff", response_model=DiffResult)
async def render_diff(request: DiffRequest) -> DiffResult:
    """Diff a before/after text pair"""
    settings = ConfigManager.get_instance().render_settings()
    size = len(request.old_text) + len(request.new_text)
    if size > settings.max_diff_input_chars:
        raise HTTPException(
            status_code=413,
            detail=f"Diff input too large ({size} characters, limit {settings.max_diff_input_chars})",
        )
    generator = DiffGenerator(settings.context_lines, settings.default_file_label)
    return generator.generate_diff(
        request.old_text,
        request.new_text,
        request.file_path,
        request.context_lines,
    )


@router.post("/rows", response_model=RowsResponse)
async def render_rows(request: RowsRequest) -> RowsResponse:
    """Classify unified diff text into display rows"""
    return RowsResponse(rows=classify_diff_rows(request.diff_text))


@router.post("/patch", response_model=NormalizedPatch)
async def render_patch(request: PatchRequest) -> NormalizedPatch:
    """Normalize apply-patch or unified diff text"""
    return normalize_patch(request.text, request.operation_hint)


@router.post("/stream")
async def render_stream(request: RenderBatchRequest):
    """Render a page of tool-call records as a stream of cards (SSE)"""
    renderer = get_renderer()

    async def event_generator():
        for event in renderer.render_page(request.records):
            yield {"event": "message", "data": event.model_dump_json()}

    return EventSourceResponse(event_generator())
