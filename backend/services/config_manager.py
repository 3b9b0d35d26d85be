"""
Configuration Manager - Handle render settings persistence
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class RenderSettings(BaseModel):
    """Validated view of the "render" config section"""

    context_lines: int = Field(default=2, ge=0, alias="contextLines")
    max_diff_input_chars: int = Field(default=200_000, gt=0, alias="maxDiffInputChars")
    default_file_label: str = Field(default="file", min_length=1, alias="defaultFileLabel")

    model_config = ConfigDict(populate_by_name=True)


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        try:
            # Environment variable first, then the home directory
            config_dir = os.environ.get("TOOL_DIFF_CONFIG_DIR")
            if not config_dir:
                config_dir = os.path.expanduser("~/.tool_diff_viewer")

            config_path = Path(config_dir)
            try:
                config_path.mkdir(parents=True, exist_ok=True)
                self._config_file = config_path / "config.json"
            except OSError as e:
                logger.warning("Cannot write to %s: %s", config_dir, e)
                self._config_file = None

            # Fall back to the temp directory when the path is not writable
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "tool_diff_viewer"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                logger.warning("Using temporary config path: %s", self._config_file)

        except OSError as e:
            logger.error("Cannot prepare config directory: %s", e)
            self._config_file = Path(tempfile.gettempdir()) / "tool_diff_viewer_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next get_instance() re-reads the environment"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file"""
        if not self._config_file.exists():
            return self._default_config()

        try:
            with open(self._config_file) as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading config: %s", e)
            return self._default_config()

        if not isinstance(loaded, dict):
            logger.warning("Ignoring config file without a JSON object: %s", self._config_file)
            return self._default_config()
        return {**self._default_config(), **loaded}

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "render": {
                "contextLines": 2,
                "maxDiffInputChars": 200_000,
                "defaultFileLabel": "file",
            },
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return self._config.copy()

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        # Merge with existing config
        self._config.update(config)

        # Ensure config directory exists
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)

    def render_settings(self) -> RenderSettings:
        """Render settings from the current config, defaults when invalid"""
        section = self.get_config().get("render")
        try:
            return RenderSettings.model_validate(section if isinstance(section, dict) else {})
        except ValidationError as e:
            logger.warning("Invalid render settings, using defaults: %s", e)
            return RenderSettings()
