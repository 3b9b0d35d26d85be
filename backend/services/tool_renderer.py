"""
Tool Call Renderer - Choose and build the view for a tool-call record
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from models.payload import ExtractedToolPayload
from models.render import (
    RenderedToolCall,
    RenderToolCallRequest,
    StreamEvent,
    ToolCategory,
    ViewKind,
)
from services.config_manager import RenderSettings
from services.diff_classifier import classify_diff_rows, is_likely_diff
from services.diff_generator import DiffGenerator
from services.payload_extractor import (
    as_object,
    as_string,
    extract_tool_payload,
    try_format_json,
    try_parse_json_record,
)

logger = logging.getLogger(__name__)

_LANGUAGE_BY_SUFFIX = (
    ((".ts", ".tsx"), "typescript"),
    ((".js", ".jsx"), "javascript"),
    ((".py",), "python"),
    ((".json",), "json"),
    ((".css",), "css"),
    ((".html",), "html"),
    ((".sql",), "sql"),
    ((".md",), "markdown"),
    ((".sh", ".zsh", ".bash"), "shell"),
)


def detect_language_from_path(path: str | None) -> str:
    if not path:
        return "text"
    normalized = path.lower()
    for suffixes, language in _LANGUAGE_BY_SUFFIX:
        if normalized.endswith(suffixes):
            return language
    return "text"


def detect_language_from_content(text: str) -> str:
    trimmed = text.strip()
    if not trimmed:
        return "text"
    if is_likely_diff("", text):
        return "diff"
    if trimmed.startswith("{") or trimmed.startswith("["):
        if try_parse_json_record(text) is not None or trimmed.startswith("["):
            return "json"
    if "<html" in trimmed or "</" in trimmed:
        return "html"
    return "text"


def _dump_json(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except RecursionError:
        # the C encoder only runs without indent
        return json.dumps(value, ensure_ascii=False)


class ToolCallRenderer:
    """Render tool-call records as structured cards"""

    def __init__(self, settings: RenderSettings | None = None):
        self.settings = settings or RenderSettings()
        self.diff_generator = DiffGenerator(
            context_lines=self.settings.context_lines,
            default_file_label=self.settings.default_file_label,
        )

    def render(self, text: str, category: ToolCategory = ToolCategory.TOOL_USE) -> RenderedToolCall:
        """Render one record; malformed content degrades to a raw view"""
        if category == ToolCategory.TOOL_RESULT:
            return self._render_result(text)

        payload = extract_tool_payload(text)
        if payload is None:
            return self._render_raw(text)
        if category == ToolCategory.TOOL_EDIT or payload.is_write:
            return self._render_edit(text, payload)
        return self._render_command(payload)

    def render_page(self, records: Iterable[RenderToolCallRequest]) -> Iterator[StreamEvent]:
        """Render a page of records as stream events, then a done event.

        A record that fails to render yields an error event and the page
        carries on with the next record.
        """
        for index, record in enumerate(records):
            try:
                card = self.render(record.text, record.category)
            except Exception as e:
                logger.exception("Failed to render record %d", index)
                yield StreamEvent(type="error", index=index, error=str(e))
                continue
            yield StreamEvent(type="card", index=index, card=card)

        yield StreamEvent(type="done", done=True)

    # ========== Views ==========

    def _render_edit(self, text: str, payload: ExtractedToolPayload) -> RenderedToolCall:
        if payload.diff_text:
            if self._too_large(len(payload.diff_text)):
                return self._render_raw(text, notice=self._size_notice(len(payload.diff_text)))
            return RenderedToolCall(
                view=ViewKind.DIFF,
                title=payload.pretty_name,
                file_path=payload.file_path,
                diff_text=payload.diff_text,
                rows=classify_diff_rows(payload.diff_text),
                language="diff",
            )

        if payload.old_text is not None and payload.new_text is not None:
            size = len(payload.old_text) + len(payload.new_text)
            if self._too_large(size):
                return self._render_raw(text, notice=self._size_notice(size))
            result = self.diff_generator.generate_diff(
                payload.old_text,
                payload.new_text,
                payload.file_path,
            )
            return RenderedToolCall(
                view=ViewKind.DIFF,
                title=payload.pretty_name,
                file_path=payload.file_path,
                diff_text=result.unified_diff,
                rows=result.rows,
                language="diff",
            )

        if payload.new_text is not None:
            return RenderedToolCall(
                view=ViewKind.WRITTEN_CONTENT,
                title=payload.pretty_name,
                file_path=payload.file_path,
                content=payload.new_text,
                language=detect_language_from_path(payload.file_path),
            )

        return self._render_raw(text)

    def _render_command(self, payload: ExtractedToolPayload) -> RenderedToolCall:
        return RenderedToolCall(
            view=ViewKind.COMMAND,
            title=payload.pretty_name,
            file_path=payload.file_path,
            command=payload.command,
            arguments_json=_dump_json(payload.input_record or payload.raw_record),
            language="shell" if payload.command else None,
        )

    def _render_result(self, text: str) -> RenderedToolCall:
        record = try_parse_json_record(text)
        if record is None:
            return self._output_card(text, metadata=None)

        output = as_string(record.get("output"))
        metadata = as_object(record.get("metadata"))
        if not output:
            return RenderedToolCall(
                view=ViewKind.RESULT,
                metadata_json=_dump_json(metadata) if metadata else None,
                content=_dump_json(record),
                language="json",
            )
        return self._output_card(output, metadata)

    def _output_card(self, output: str, metadata: dict[str, Any] | None) -> RenderedToolCall:
        metadata_json = _dump_json(metadata) if metadata else None
        inner = try_parse_json_record(output)
        if inner is not None:
            return RenderedToolCall(
                view=ViewKind.RESULT,
                metadata_json=metadata_json,
                content=_dump_json(inner),
                language="json",
            )

        language = detect_language_from_content(output)
        rows = []
        if language == "diff" and not self._too_large(len(output)):
            rows = classify_diff_rows(output)
        return RenderedToolCall(
            view=ViewKind.RESULT,
            metadata_json=metadata_json,
            content=output,
            rows=rows,
            language=language,
        )

    def _render_raw(self, text: str, notice: str | None = None) -> RenderedToolCall:
        formatted = try_format_json(text)
        return RenderedToolCall(
            view=ViewKind.RAW,
            content=formatted,
            language="json" if formatted != text else detect_language_from_content(text),
            notice=notice,
        )

    # ========== Size Bound ==========

    def _too_large(self, size: int) -> bool:
        return size > self.settings.max_diff_input_chars

    def _size_notice(self, size: int) -> str:
        logger.info(
            "Skipping diff for %d characters (limit %d)",
            size,
            self.settings.max_diff_input_chars,
        )
        return (
            f"Diff input too large ({size} characters, limit "
            f"{self.settings.max_diff_input_chars}); showing raw content"
        )
