"""
Settings manager for the sprite editor
Handles saving and loading user preferences
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Optional, Union


class SettingsManager:
    """Manages application settings with persistence"""

    def __init__(self, app_name="pixelsmith", settings_dir: Optional[Union[str, Path]] = None):
        self.app_name = app_name
        self.settings_file = self._get_settings_path(settings_dir)
        self.settings = self._load_settings()

    def _get_settings_path(self, settings_dir: Optional[Union[str, Path]]) -> Path:
        """Get the appropriate settings directory for the platform"""
        if settings_dir is not None:
            directory = Path(settings_dir)
        elif os.name == "nt":  # Windows
            base = Path(os.environ.get("APPDATA", os.path.expanduser("~")))
            directory = base / self.app_name
        else:  # Linux/Mac
            base = Path(os.path.expanduser("~"))
            directory = base / f".{self.app_name}"

        directory.mkdir(parents=True, exist_ok=True)
        return directory / "settings.json"

    def _load_settings(self) -> dict[str, Any]:
        """Load settings from file, filling in any missing defaults"""
        settings = self._get_default_settings()
        if self.settings_file.exists():
            try:
                with open(self.settings_file) as f:
                    stored = json.load(f)
            except (OSError, json.JSONDecodeError):
                # If file is corrupted, start fresh
                return settings
            if isinstance(stored, dict):
                _merge(settings, stored)
        return settings

    def _get_default_settings(self) -> dict[str, Any]:
        """Get default settings"""
        return copy.deepcopy(
            {
                "grid": {"rows": 125, "cols": 125, "cell_size": 16},
                "view": {"zoom_factor": 1.05},
                "paint_color": "#000000",
                "catalog_file": str(self.settings_file.parent / "catalog.json"),
                "log_level": "INFO",
                "log_file": "",
                "last_sprite_file": "",
                "recent_files": {"sprite": []},
                "preferences": {
                    "max_recent_files": 10,
                },
            }
        )

    def save_settings(self):
        """Save current settings to file"""
        try:
            with open(self.settings_file, "w") as f:
                json.dump(self.settings, f, indent=2)
        except OSError:
            # Settings are a convenience, drawing goes on without them
            pass

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value by dotted key"""
        keys = key.split(".")
        value = self.settings
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any):
        """Set a setting value by dotted key"""
        keys = key.split(".")
        target = self.settings
        for k in keys[:-1]:
            if not isinstance(target.get(k), dict):
                target[k] = {}
            target = target[k]
        target[keys[-1]] = value
        self.save_settings()

    def add_recent_file(self, file_path: str, file_type: str = "sprite"):
        """Add a file to recent files list"""
        file_path = str(file_path)

        recent_files = self.settings.setdefault("recent_files", {})
        recent_list = recent_files.setdefault(file_type, [])

        if file_path in recent_list:
            recent_list.remove(file_path)

        recent_list.insert(0, file_path)

        max_recent = self.get("preferences.max_recent_files", 10)
        recent_files[file_type] = recent_list[:max_recent]

        if file_type == "sprite":
            self.settings["last_sprite_file"] = file_path

        self.save_settings()

    def get_recent_files(self, file_type: str = "sprite") -> list:
        """Get recent files for a specific type"""
        return self.settings.get("recent_files", {}).get(file_type, [])

    def get_last_file(self) -> Optional[str]:
        """Get the last opened or saved sprite file"""
        return self.settings.get("last_sprite_file") or None

    def clear_recent_files(self, file_type: str = "sprite"):
        """Clear recent files list"""
        self.settings.setdefault("recent_files", {})[file_type] = []
        self.save_settings()


def _merge(base: dict, override: dict) -> None:
    """Recursively overlay stored values onto defaults"""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
