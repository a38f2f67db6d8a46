from __future__ import annotations

import json
import os
from typing import Any

from .logger import get_logger
from .path_utils import abs_path_str

_logger = get_logger("settings")

_DIR_KEYS = ("image_dir", "build_dir", "gen_img_dir")


class SettingsManager:
    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "image_dir": "",
        "build_dir": "",
        "gen_img_dir": "",
        "http_path": "",
        "direction": "horizontal",
    }

    def load(self) -> None:
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        try:
            parent = os.path.dirname(self.settings_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except OSError as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        # Directories are stored absolute so a later chdir does not move them
        if key in _DIR_KEYS and isinstance(value, str) and value:
            value = abs_path_str(value)
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    def _dir(self, key: str) -> str:
        val = self.get(key)
        return abs_path_str(val) if isinstance(val, str) and val else ""

    @property
    def image_dir(self) -> str:
        return self._dir("image_dir")

    @property
    def build_dir(self) -> str:
        return self._dir("build_dir")

    @property
    def gen_img_dir(self) -> str:
        return self._dir("gen_img_dir")

    @property
    def http_path(self) -> str:
        val = self.get("http_path")
        return val.strip() if isinstance(val, str) else ""

    @property
    def direction(self) -> str:
        val = self.get("direction")
        return val if isinstance(val, str) and val else self.DEFAULTS["direction"]
