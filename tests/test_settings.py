"""Tests for the persisted theme preference."""

import pytest
from PyQt5.QtCore import QSettings

from timeline_annotator.domain import AppConfig
from timeline_annotator.settings import THEME_MODE_KEY, load_app_config, load_theme_mode, save_theme_mode


@pytest.fixture
def settings(tmp_path) -> QSettings:
    return QSettings(str(tmp_path / "settings.ini"), QSettings.IniFormat)


class TestThemeMode:
    def test_default_is_light(self, settings) -> None:
        assert load_theme_mode(settings) == "light"

    def test_round_trip(self, settings) -> None:
        assert save_theme_mode("dark", settings) == "dark"
        assert load_theme_mode(settings) == "dark"

    def test_invalid_stored_value(self, settings) -> None:
        settings.setValue(THEME_MODE_KEY, "neon")
        assert load_theme_mode(settings) == "light"

    def test_invalid_saved_value_is_normalized(self, settings) -> None:
        assert save_theme_mode("neon", settings) == "light"


class TestLoadAppConfig:
    def test_theme_applied_to_base(self, settings) -> None:
        save_theme_mode("dark", settings)
        cfg = load_app_config(settings, base=AppConfig(removal_delay_ms=50))

        assert cfg.theme_mode == "dark"
        assert cfg.removal_delay_ms == 50
