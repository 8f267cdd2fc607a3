from __future__ import annotations

import json

from hexdiff.services.config_manager import ConfigManager


def test_defaults_when_no_file(isolated_config) -> None:
    manager = ConfigManager.get_instance()
    assert manager.config_file == isolated_config / "config.json"
    assert manager.view_settings()["bytesPerRow"] == 16
    assert manager.get("server")["port"] == 8000


def test_save_and_reload(isolated_config) -> None:
    manager = ConfigManager.get_instance()
    manager.set("view", {"bytesPerRow": 8})

    stored = json.loads((isolated_config / "config.json").read_text())
    assert stored["view"]["bytesPerRow"] == 8

    ConfigManager.reset_instance()
    reloaded = ConfigManager.get_instance()
    view = reloaded.view_settings()
    assert view["bytesPerRow"] == 8
    assert view["rowHeight"] == 22


def test_corrupt_file_falls_back_to_defaults(isolated_config) -> None:
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "config.json").write_text("{not json")
    manager = ConfigManager.get_instance()
    assert manager.get_config()["view"]["overscan"] == 10


def test_explicit_directory(tmp_path) -> None:
    manager = ConfigManager(str(tmp_path / "elsewhere"))
    assert manager.config_file.parent == tmp_path / "elsewhere"


def test_invalid_stored_view_falls_back_to_defaults(isolated_config) -> None:
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "config.json").write_text(json.dumps({"view": {"bytesPerRow": 0.5}}))
    view = ConfigManager.get_instance().view_settings()
    assert view["bytesPerRow"] == 16
    assert view["gutterHeight"] == 400
