#!/usr/bin/env python3
"""
Tests for settings persistence
"""

import json

from pixelsmith.settings_manager import SettingsManager


class TestSettingsManager:
    """Test the JSON settings store"""

    def test_defaults(self, tmp_path):
        settings = SettingsManager(settings_dir=tmp_path)
        assert settings.settings_file == tmp_path / "settings.json"
        assert settings.get("grid.rows") == 125
        assert settings.get("grid.cell_size") == 16
        assert settings.get("view.zoom_factor") == 1.05
        assert settings.get("paint_color") == "#000000"
        assert settings.get("catalog_file") == str(tmp_path / "catalog.json")

    def test_missing_key_returns_default(self, tmp_path):
        settings = SettingsManager(settings_dir=tmp_path)
        assert settings.get("grid.nope", 3) == 3
        assert settings.get("paint_color.deeper") is None

    def test_set_persists(self, tmp_path):
        settings = SettingsManager(settings_dir=tmp_path)
        settings.set("grid.rows", 32)
        settings.set("window.geometry.width", 800)

        reloaded = SettingsManager(settings_dir=tmp_path)

        assert reloaded.get("grid.rows") == 32
        assert reloaded.get("grid.cols") == 125
        assert reloaded.get("window.geometry.width") == 800

    def test_stored_values_merge_with_defaults(self, tmp_path):
        (tmp_path / "settings.json").write_text(json.dumps({"grid": {"rows": 10}}))
        settings = SettingsManager(settings_dir=tmp_path)
        assert settings.get("grid.rows") == 10
        assert settings.get("grid.cols") == 125
        assert settings.get("preferences.max_recent_files") == 10

    def test_corrupt_file_falls_back_to_defaults(self, tmp_path):
        (tmp_path / "settings.json").write_text("{{{")
        settings = SettingsManager(settings_dir=tmp_path)
        assert settings.get("grid.rows") == 125

    def test_recent_files(self, tmp_path):
        settings = SettingsManager(settings_dir=tmp_path)
        settings.add_recent_file("/a.png")
        settings.add_recent_file("/b.png")
        settings.add_recent_file("/a.png")

        assert settings.get_recent_files() == ["/a.png", "/b.png"]
        assert settings.get_last_file() == "/a.png"

    def test_recent_files_are_capped(self, tmp_path):
        settings = SettingsManager(settings_dir=tmp_path)
        settings.set("preferences.max_recent_files", 2)
        for name in ("1", "2", "3"):
            settings.add_recent_file(f"/{name}.png")
        assert settings.get_recent_files() == ["/3.png", "/2.png"]

    def test_clear_recent_files(self, tmp_path):
        settings = SettingsManager(settings_dir=tmp_path)
        settings.add_recent_file("/a.png")
        settings.clear_recent_files()
        assert settings.get_recent_files() == []

    def test_no_last_file(self, tmp_path):
        assert SettingsManager(settings_dir=tmp_path).get_last_file() is None
