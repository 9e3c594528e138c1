# timeline_annotator/theme.py
from __future__ import annotations

from PyQt5.QtGui import QColor, QPalette
from PyQt5.QtWidgets import QApplication

from .domain import THEME_DARK, normalize_theme_mode


def dark_palette() -> QPalette:
    p = QPalette()
    p.setColor(QPalette.Window, QColor("#121212"))
    p.setColor(QPalette.WindowText, QColor("#e6e6e6"))
    p.setColor(QPalette.Base, QColor("#1e1e1e"))
    p.setColor(QPalette.AlternateBase, QColor("#262626"))
    p.setColor(QPalette.ToolTipBase, QColor("#2b2b2b"))
    p.setColor(QPalette.ToolTipText, QColor("#e6e6e6"))
    p.setColor(QPalette.Text, QColor("#e6e6e6"))
    p.setColor(QPalette.Button, QColor("#242424"))
    p.setColor(QPalette.ButtonText, QColor("#e6e6e6"))
    p.setColor(QPalette.Highlight, QColor("#1e88e5"))
    p.setColor(QPalette.HighlightedText, QColor("#ffffff"))
    p.setColor(QPalette.Disabled, QPalette.Text, QColor("#7a7a7a"))
    p.setColor(QPalette.Disabled, QPalette.WindowText, QColor("#7a7a7a"))
    p.setColor(QPalette.Disabled, QPalette.ButtonText, QColor("#7a7a7a"))
    return p


def apply_theme(app: QApplication, mode: str) -> None:
    app.setStyle("Fusion")
    if normalize_theme_mode(mode) == THEME_DARK:
        app.setPalette(dark_palette())
    else:
        app.setPalette(app.style().standardPalette())


def timeline_track_color(mode: str) -> str:
    return "#2b2b2b" if normalize_theme_mode(mode) == THEME_DARK else "#e0e0e0"
