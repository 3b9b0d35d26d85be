"""Services module - Diff engine and settings"""

from .config_manager import ConfigManager, RenderSettings
from .diff_classifier import classify_diff_rows
from .diff_generator import DiffGenerator
from .hunk_builder import build_hunks
from .line_aligner import align_lines
from .patch_normalizer import normalize_patch
from .payload_extractor import extract_tool_payload
from .tool_renderer import ToolCallRenderer
from .word_aligner import align_words

__all__ = [
    "ConfigManager",
    "RenderSettings",
    "classify_diff_rows",
    "DiffGenerator",
    "build_hunks",
    "align_lines",
    "normalize_patch",
    "extract_tool_payload",
    "ToolCallRenderer",
    "align_words",
]
