# timeline_annotator/settings.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from PyQt5.QtCore import QSettings

from .domain import AppConfig, normalize_theme_mode

logger = logging.getLogger(__name__)

SETTINGS_ORG = "timeline-annotator"
SETTINGS_APP = "timeline-annotator"
THEME_MODE_KEY = "theme_mode"


def open_settings() -> QSettings:
    return QSettings(SETTINGS_ORG, SETTINGS_APP)


def load_theme_mode(settings: Optional[QSettings] = None) -> str:
    s = settings if settings is not None else open_settings()
    raw = s.value(THEME_MODE_KEY, "light")
    return normalize_theme_mode(raw)


def save_theme_mode(mode: str, settings: Optional[QSettings] = None) -> str:
    """Normalizes and stores the theme preference. Returns the stored value."""
    s = settings if settings is not None else open_settings()
    normalized = normalize_theme_mode(mode)
    s.setValue(THEME_MODE_KEY, normalized)
    s.sync()
    return normalized


def load_app_config(settings: Optional[QSettings] = None, base: Optional[AppConfig] = None) -> AppConfig:
    """
    Builds the AppConfig used for the whole run. Only the theme is persisted;
    everything else comes from `base` (defaults if None).
    """
    cfg = base if base is not None else AppConfig()
    mode = load_theme_mode(settings)
    logger.debug("Loaded theme mode %r", mode)
    return replace(cfg, theme_mode=mode)
