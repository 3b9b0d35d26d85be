from __future__ import annotations

import pytest

from services.config_manager import ConfigManager


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point ConfigManager at a throwaway directory."""
    monkeypatch.setenv("TOOL_DIFF_CONFIG_DIR", str(tmp_path))
    ConfigManager.reset_instance()
    yield tmp_path
    ConfigManager.reset_instance()


@pytest.fixture
def client(config_dir):
    """FastAPI test client with isolated settings."""
    from fastapi.testclient import TestClient

    from main import app

    with TestClient(app) as test_client:
        yield test_client


def kinds(items) -> list[str]:
    return [item.kind.value for item in items]
