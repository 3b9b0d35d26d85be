"""
Tool Payload Extractor - Resolve tool-call JSON records across vendor schemas
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Sequence
from typing import Any

from models.payload import ExtractedToolPayload
from services.patch_normalizer import looks_like_apply_patch, normalize_patch

logger = logging.getLogger(__name__)

# Accessors read from named scopes: "record" is the whole JSON object,
# "input" is the argument object of the call (empty if none) and "payload"
# is the argument object falling back to the record itself.
Scopes = dict[str, dict[str, Any]]
FieldAccessor = Callable[[Scopes], Any]


def field(scope: str, *keys: str) -> FieldAccessor:
    """Accessor for a (possibly nested) key inside one scope"""

    def accessor(scopes: Scopes) -> Any:
        value: Any = scopes.get(scope)
        for key in keys:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        return value

    return accessor


# ========== Alias Tables (priority order) ==========

NAME_FIELDS = (
    field("record", "name"),
    field("record", "tool_name"),
    field("record", "tool"),
    field("record", "functionCall", "name"),
)
INPUT_RECORD_FIELDS = (
    field("record", "input"),
    field("record", "args"),
    field("record", "arguments"),
    field("record", "functionCall", "args"),
)
OPERATION_FIELDS = (
    field("record", "operation"),
    field("input", "operation"),
)
APPLY_PATCH_HINT_FIELDS = (
    field("record", "name"),
    field("record", "tool"),
    field("record", "type"),
    field("payload", "operation"),
    field("payload", "mode"),
)
COMMAND_FIELDS = (
    field("input", "cmd"),
    field("input", "command"),
    field("record", "cmd"),
    field("record", "command"),
)
FILE_PATH_FIELDS = (
    field("payload", "file_path"),
    field("payload", "path"),
    field("payload", "file"),
    field("record", "file_path"),
    field("record", "path"),
)
OLD_TEXT_FIELDS = (
    field("payload", "old_string"),
    field("payload", "oldText"),
    field("payload", "before"),
    field("record", "old_string"),
)
NEW_TEXT_FIELDS = (
    field("payload", "new_string"),
    field("payload", "newText"),
    field("payload", "after"),
    field("payload", "content"),
    field("payload", "text"),
    field("payload", "write_content"),
    field("payload", "new_content"),
    field("record", "new_string"),
)
DIFF_FIELDS = (
    field("payload", "diff"),
    field("payload", "patch"),
    field("record", "diff"),
    field("record", "patch"),
)
PATCH_INPUT_FIELDS = (
    field("record", "input"),
    field("payload", "input"),
    field("record", "arguments"),
)

WRITE_HINTS = (
    "edit",
    "write",
    "patch",
    "apply_patch",
    "replace",
    "multi_edit",
    "create_file",
    "update_file",
    "delete_file",
    "str_replace",
)

PRETTY_TOOL_NAMES = {
    "exec_command": "Execute Command",
    "run_command": "Execute Command",
    "command": "Execute Command",
    "grep": "Grep",
    "search": "Search",
    "read": "Read",
    "edit": "Edit",
    "apply_patch": "Apply Patch",
    "write": "Write",
    "write_file": "Write File",
    "str_replace": "Replace Text",
    "multi_edit": "Multi Edit",
}


# ========== Value Coercion ==========


def as_object(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def as_string(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def as_non_empty_string(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def as_command(value: Any) -> str | None:
    """Commands come as a string or as an argv list"""
    if isinstance(value, list) and value and all(isinstance(part, str) for part in value):
        return as_non_empty_string(" ".join(value))
    return as_non_empty_string(value)


def as_argument_object(value: Any) -> dict[str, Any] | None:
    """Argument objects may arrive JSON-encoded in a string"""
    if isinstance(value, str):
        return try_parse_json_record(value)
    return as_object(value)


def resolve(
    accessors: Sequence[FieldAccessor],
    scopes: Scopes,
    coerce: Callable[[Any], Any] = as_non_empty_string,
) -> Any:
    """First alias whose coerced value is present"""
    for accessor in accessors:
        value = coerce(accessor(scopes))
        if value is not None:
            return value
    return None


def resolve_all(accessors: Sequence[FieldAccessor], scopes: Scopes) -> list[str]:
    values = (as_non_empty_string(accessor(scopes)) for accessor in accessors)
    return [value for value in values if value]


# ========== JSON Helpers ==========


def try_parse_json_record(text: str | None) -> dict[str, Any] | None:
    """Parse text as a JSON object; anything else is None"""
    if not text:
        return None
    try:
        return as_object(json.loads(text))
    except (ValueError, RecursionError):
        return None


def try_format_json(text: str) -> str:
    """Pretty-print any JSON value, or return the text untouched"""
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except (ValueError, RecursionError):
        return text


# ========== Name Classification ==========


def pretty_tool_name(name: str) -> str:
    normalized = name.strip().lower()
    if normalized in PRETTY_TOOL_NAMES:
        return PRETTY_TOOL_NAMES[normalized]
    words = re.sub(r"\s+", " ", re.sub(r"[_-]+", " ", normalized)).strip()
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), words)


def looks_like_write_operation(hint: str | None) -> bool:
    normalized = (hint or "").lower()
    if not normalized:
        return False
    return any(candidate in normalized for candidate in WRITE_HINTS)


# ========== Extraction ==========


def extract_tool_payload(raw_text: str) -> ExtractedToolPayload | None:
    """Normalize one tool-call record.

    Returns None when the text is not a JSON object; callers then show the
    raw (or pretty-printed) text.
    """
    record = try_parse_json_record(raw_text)
    if record is None:
        logger.debug("Tool-call record is not a JSON object")
        return None

    scopes: Scopes = {"record": record}
    input_record = resolve(INPUT_RECORD_FIELDS, scopes, as_argument_object)
    scopes["input"] = input_record or {}
    scopes["payload"] = input_record or record

    name = resolve(NAME_FIELDS, scopes)
    apply_patch_hint = " ".join(resolve_all(APPLY_PATCH_HINT_FIELDS, scopes))
    write_hint = " ".join(filter(None, [name, *resolve_all(OPERATION_FIELDS, scopes), apply_patch_hint]))

    diff_text = resolve(DIFF_FIELDS, scopes)
    primary_path = None
    if diff_text and looks_like_apply_patch(None, diff_text):
        normalized = normalize_patch(diff_text, apply_patch_hint)
        diff_text, primary_path = normalized.diff_text, normalized.primary_path
    elif diff_text is None:
        patch_input = resolve(PATCH_INPUT_FIELDS, scopes)
        if looks_like_apply_patch(apply_patch_hint, patch_input):
            normalized = normalize_patch(patch_input, apply_patch_hint)
            diff_text, primary_path = normalized.diff_text, normalized.primary_path

    return ExtractedToolPayload(
        name=name,
        pretty_name=pretty_tool_name(name) if name else None,
        command=resolve(COMMAND_FIELDS, scopes, as_command),
        file_path=resolve(FILE_PATH_FIELDS, scopes) or primary_path,
        old_text=resolve(OLD_TEXT_FIELDS, scopes, as_string),
        new_text=resolve(NEW_TEXT_FIELDS, scopes, as_string),
        diff_text=diff_text,
        is_write=looks_like_write_operation(write_hint),
        input_record=input_record,
        raw_record=record,
    )
