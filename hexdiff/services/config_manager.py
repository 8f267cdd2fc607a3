"""
Configuration Manager - View defaults and server settings persistence
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from hexdiff.models.view import ViewSettings


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self, config_dir: str | None = None):
        # 1st: explicit argument, 2nd: environment, 3rd: ~/.hexdiff
        config_dir = config_dir or os.environ.get("HEXDIFF_CONFIG_DIR")
        if not config_dir:
            config_dir = os.path.expanduser("~/.hexdiff")

        config_path = Path(config_dir)
        try:
            config_path.mkdir(parents=True, exist_ok=True)
            self._config_file = config_path / "config.json"
        except OSError as e:
            print(f"[ConfigManager] Warning: Cannot write to {config_dir}: {e}")
            self._config_file = None

        # Fallback: temp directory
        if not self._config_file:
            tmp_dir = Path(tempfile.gettempdir()) / "hexdiff"
            tmp_dir.mkdir(parents=True, exist_ok=True)
            self._config_file = tmp_dir / "config.json"
            print(f"[ConfigManager] Using temporary config path: {self._config_file}")

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Forget the singleton (next get_instance re-reads the environment)"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, filling gaps from the defaults"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"[ConfigManager] Error loading config: {e}")
            return config

        for key, value in stored.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                config[key] = {**config[key], **value}
            else:
                config[key] = value
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "view": {
                "bytesPerRow": 16,
                "rowHeight": 22,
                "overscan": 10,
                "viewportHeight": 440,
                "gutterHeight": 400,
            },
            "search": {"focusMarginPx": 80},
            "server": {"host": "0.0.0.0", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return copy.deepcopy(self._config)

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config.update(config)
        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._config_file, "w") as f:
                json.dump(self._config, f, indent=2)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)

    def view_settings(self) -> dict[str, Any]:
        """View section merged over the defaults, validated"""
        try:
            view = ViewSettings.model_validate({**self._default_config()["view"], **self.get("view", {})})
        except ValidationError as e:
            print(f"[ConfigManager] Invalid view settings, using defaults: {e}")
            view = ViewSettings()
        return view.model_dump(by_alias=True)
