"""
Patch Normalizer - Turn apply-patch envelopes and raw unified diffs into canonical diff text
"""

from __future__ import annotations

import logging

from models.payload import NormalizedPatch, PatchAction, PatchDirective
from services.diff_classifier import parse_hunk_start
from services.line_aligner import split_lines

logger = logging.getLogger(__name__)

BEGIN_PATCH_MARKER = "*** Begin Patch"
APPLY_PATCH_HINT = "apply_patch"

_ENVELOPE_LINES = {"*** Begin Patch", "*** End Patch", "*** End of File"}
_DIRECTIVE_PREFIXES = (
    ("*** Update File: ", PatchAction.UPDATE),
    ("*** Add File: ", PatchAction.ADD),
    ("*** Delete File: ", PatchAction.DELETE),
    ("*** Move to: ", PatchAction.MOVE),
)
_BODY_PREFIXES = ("@@", "+", "-", " ")
_DEV_NULL = "/dev/null"


def looks_like_apply_patch(operation_hint: str | None, text: str | None) -> bool:
    """Apply-patch when the operation name says so or the envelope marker is present"""
    if operation_hint and APPLY_PATCH_HINT in operation_hint.lower():
        return True
    return bool(text) and BEGIN_PATCH_MARKER in text


def parse_patch_directive(line: str) -> PatchDirective | None:
    """Parse a per-file directive line; directives without a path are ignored"""
    for prefix, action in _DIRECTIVE_PREFIXES:
        if line.startswith(prefix):
            path = line[len(prefix):].strip()
            if not path:
                return None
            return PatchDirective(action=action, path=path)
    return None


def extract_first_patch_path(text: str | None) -> str | None:
    """Path named by the first Update/Add/Delete directive"""
    if not text:
        return None
    for line in split_lines(text):
        directive = parse_patch_directive(line)
        if directive and directive.action != PatchAction.MOVE:
            return directive.path
    return None


def convert_apply_patch(text: str | None) -> str | None:
    """Translate an apply-patch envelope into unified diff text.

    Returns None when no hunk body line was found.
    """
    if not text:
        return None

    output: list[str] = []
    git_index = new_index = -1
    old_path = ""
    current: PatchAction | None = None
    has_rows = False

    for line in split_lines(text):
        if line in _ENVELOPE_LINES:
            continue

        directive = parse_patch_directive(line)
        if directive is not None:
            if directive.action == PatchAction.MOVE:
                # Only the new side follows a move
                if current in (PatchAction.UPDATE, PatchAction.ADD):
                    new_path = f"b/{directive.path}"
                    output[git_index] = f"diff --git a/{old_path} {new_path}"
                    output[new_index] = f"+++ {new_path}"
                continue

            current = directive.action
            old_path = directive.path
            old_side = _DEV_NULL if current == PatchAction.ADD else f"a/{old_path}"
            new_side = _DEV_NULL if current == PatchAction.DELETE else f"b/{old_path}"
            git_index = len(output)
            output.append(f"diff --git a/{old_path} b/{old_path}")
            output.append(f"--- {old_side}")
            new_index = len(output)
            output.append(f"+++ {new_side}")
            continue

        if line.startswith(_BODY_PREFIXES):
            output.append(line)
            has_rows = True

    if not has_rows:
        logger.debug("Apply-patch text produced no hunk rows")
        return None
    return "\n".join(output)


def is_unified_diff(text: str | None) -> bool:
    """Strong unified-diff markers: a git header or a well-formed hunk header"""
    if not text:
        return False
    for line in split_lines(text):
        if line.startswith("diff --git ") or parse_hunk_start(line) is not None:
            return True
    return False


def _unified_primary_path(text: str) -> str | None:
    old_path = None
    for line in split_lines(text):
        if line.startswith("+++ ") or line.startswith("--- "):
            path = line[4:].split("\t", 1)[0].strip()
            if not path or path == _DEV_NULL:
                continue
            if line.startswith("+++ "):
                return _strip_side_prefix(path, "b/")
            if old_path is None:
                old_path = _strip_side_prefix(path, "a/")
        elif line.startswith("diff --git ") and old_path is None:
            _, _, tail = line.partition(" b/")
            if tail:
                old_path = tail.strip()
    return old_path


def _strip_side_prefix(path: str, prefix: str) -> str:
    return path[len(prefix):] if path.startswith(prefix) else path


def normalize_patch(raw_text: str | None, operation_hint: str = "") -> NormalizedPatch:
    """Produce canonical unified diff text plus the primary file path.

    Never raises: text that is neither an apply-patch envelope nor a unified
    diff yields an empty result and callers show the raw text instead.
    """
    if not raw_text:
        return NormalizedPatch()

    if looks_like_apply_patch(operation_hint, raw_text):
        return NormalizedPatch(
            diff_text=convert_apply_patch(raw_text),
            primary_path=extract_first_patch_path(raw_text),
        )

    if is_unified_diff(raw_text):
        return NormalizedPatch(diff_text=raw_text, primary_path=_unified_primary_path(raw_text))

    logger.debug("Text is neither an apply-patch envelope nor a unified diff")
    return NormalizedPatch()
