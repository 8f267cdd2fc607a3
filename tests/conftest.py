from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from hexdiff.services.config_manager import ConfigManager
from hexdiff.services.session_store import SessionStore


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config singleton at a throwaway directory"""
    monkeypatch.setenv("HEXDIFF_CONFIG_DIR", str(tmp_path / "config"))
    ConfigManager.reset_instance()
    SessionStore._instance = None
    yield tmp_path / "config"
    ConfigManager.reset_instance()
    SessionStore._instance = None


@pytest.fixture
def client() -> TestClient:
    from hexdiff.main import app

    return TestClient(app)
