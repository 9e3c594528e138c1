# timeline_annotator/app.py
from __future__ import annotations

import logging
import sys
from typing import Optional

from PyQt5.QtWidgets import QApplication

from .main_window import MainWindow
from .settings import SETTINGS_APP, SETTINGS_ORG, load_app_config
from .theme import apply_theme

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def run_app(video_path: Optional[str] = None, debug: bool = False) -> int:
    configure_logging(debug)

    app = QApplication(sys.argv)
    app.setOrganizationName(SETTINGS_ORG)
    app.setApplicationName(SETTINGS_APP)

    config = load_app_config()
    apply_theme(app, config.theme_mode)
    logger.debug("Starting with config %s", config.to_dict())

    win = MainWindow(config=config, video_path=video_path)
    win.show()

    return app.exec_()
