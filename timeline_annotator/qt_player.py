# timeline_annotator/qt_player.py
from __future__ import annotations

import logging
import os
from typing import Optional

from PyQt5.QtCore import QUrl
from PyQt5.QtMultimedia import QMediaContent, QMediaPlayer
from PyQt5.QtMultimediaWidgets import QVideoWidget

from .player import DURATIONCHANGE, TIMEUPDATE, PlayerControl

logger = logging.getLogger(__name__)


class QtPlayerControl(PlayerControl):
    """
    PlayerControl backed by a QMediaPlayer rendering into a QVideoWidget.

    QMediaPlayer reports milliseconds; everything exposed here is seconds.
    One instance per opened video: dispose() stops playback and releases the media.
    """

    def __init__(self, video_output: QVideoWidget, path: str):
        super().__init__()
        self._player = QMediaPlayer(None, QMediaPlayer.VideoSurface)
        self._player.setVideoOutput(video_output)

        self._player.positionChanged.connect(self._on_position_changed)
        self._player.durationChanged.connect(self._on_duration_changed)
        self._player.error.connect(self._on_error)

        if os.path.exists(path):
            self._player.setMedia(QMediaContent(QUrl.fromLocalFile(os.path.abspath(path))))
        else:
            logger.warning("Video file missing: %s", path)
            self._player.setMedia(QMediaContent())

    # ---------------- PlayerControl ----------------

    def current_time(self) -> float:
        if self.disposed:
            return 0.0
        return max(0, int(self._player.position() or 0)) / 1000.0

    def duration(self) -> float:
        if self.disposed:
            return 0.0
        return max(0, int(self._player.duration() or 0)) / 1000.0

    def seek(self, seconds: float) -> None:
        if self.disposed:
            return
        self._player.setPosition(int(round(max(0.0, float(seconds)) * 1000.0)))

    # ---------------- Playback controls ----------------

    def play(self) -> None:
        if not self.disposed:
            self._player.play()

    def pause(self) -> None:
        if not self.disposed:
            self._player.pause()

    def toggle_play(self) -> None:
        if self.is_playing():
            self.pause()
        else:
            self.play()

    def is_playing(self) -> bool:
        if self.disposed:
            return False
        return self._player.state() == QMediaPlayer.PlayingState

    def dispose(self) -> None:
        if self.disposed:
            return
        super().dispose()
        self._player.positionChanged.disconnect(self._on_position_changed)
        self._player.durationChanged.disconnect(self._on_duration_changed)
        self._player.error.disconnect(self._on_error)
        self._player.stop()
        self._player.setMedia(QMediaContent())
        self._player.deleteLater()

    # ---------------- Signal handlers ----------------

    def _on_position_changed(self, _pos: int) -> None:
        self.emit(TIMEUPDATE)

    def _on_duration_changed(self, _dur: int) -> None:
        self.emit(DURATIONCHANGE)

    def _on_error(self, _err) -> None:
        logger.warning("Media player error: %s", self._player.errorString())
