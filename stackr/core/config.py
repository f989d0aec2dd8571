# stackr/core/config.py
from __future__ import annotations
from typing import Any
from PySide6.QtCore import QSettings
from app_config import apply_qsettings_org, DEFAULTS, SETTINGS_FILE

class Settings:
    """
    Thin wrapper over QSettings with defaults and simple dict-like get/set.
    Backed by an INI file at SETTINGS_FILE so every platform stores the same way.
    Only editor preferences live here; layouts are never written to disk.
    """
    def __init__(self):
        apply_qsettings_org()
        self._qs = QSettings(str(SETTINGS_FILE), QSettings.IniFormat)

    def get(self, key: str, default: Any = None) -> Any:
        val = self._qs.value(key, default)
        return val if val is not None else default

    def set(self, key: str, value: Any) -> None:
        self._qs.setValue(key, value)
        self._qs.sync()

    def get_bool(self, key: str, default: bool = False) -> bool:
        val = self.get(key, default)
        # INI backends hand booleans back as strings
        if isinstance(val, str):
            return val.strip().lower() in ("1", "true", "yes", "on")
        return bool(val)

    def get_float(self, key: str, default: float = 0.0) -> float:
        try:
            return float(self.get(key, default))
        except (TypeError, ValueError):
            return default

    def canvas_default(self, name: str) -> Any:
        """Stored canvas preference, falling back to app_config.DEFAULTS."""
        fallback = DEFAULTS["canvas"][name]
        if isinstance(fallback, bool):
            return self.get_bool(f"canvas/{name}", fallback)
        if isinstance(fallback, int):
            return int(self.get_float(f"canvas/{name}", fallback))
        return self.get_float(f"canvas/{name}", fallback)


def get_settings() -> Settings:
    return Settings()
