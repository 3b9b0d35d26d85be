"""
Tests for services.config_manager - render settings persistence
"""

from __future__ import annotations

import json

from services.config_manager import ConfigManager, RenderSettings


def test_defaults_without_file(config_dir):
    manager = ConfigManager.get_instance()

    assert manager.config_file == config_dir / "config.json"
    settings = manager.render_settings()
    assert settings.context_lines == 2
    assert settings.max_diff_input_chars == 200_000
    assert settings.default_file_label == "file"


def test_singleton(config_dir):
    assert ConfigManager.get_instance() is ConfigManager.get_instance()


def test_save_and_reload(config_dir):
    manager = ConfigManager.get_instance()
    manager.save_config({"render": {"contextLines": 5, "maxDiffInputChars": 99, "defaultFileLabel": "x"}})

    stored = json.loads((config_dir / "config.json").read_text())
    assert stored["render"]["contextLines"] == 5

    ConfigManager.reset_instance()
    settings = ConfigManager.get_instance().render_settings()
    assert settings == RenderSettings(context_lines=5, max_diff_input_chars=99, default_file_label="x")


def test_corrupt_file_loads_defaults(config_dir):
    (config_dir / "config.json").write_text("{not json")
    assert ConfigManager.get_instance().render_settings() == RenderSettings()


def test_invalid_render_section_uses_defaults(config_dir):
    (config_dir / "config.json").write_text(json.dumps({"render": {"contextLines": -3}}))
    assert ConfigManager.get_instance().render_settings().context_lines == 2


def test_get_and_set(config_dir):
    manager = ConfigManager.get_instance()
    manager.set("viewer", {"theme": "dark"})
    assert manager.get("viewer") == {"theme": "dark"}
    assert manager.get("missing", "fallback") == "fallback"
    assert json.loads((config_dir / "config.json").read_text())["viewer"] == {"theme": "dark"}
