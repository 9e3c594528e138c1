# timeline_annotator/timeline.py
from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from .domain import coerce_seconds
from .player import DURATIONCHANGE, TIMEUPDATE, PlayerControl, is_available
from .timeutils import percent_to_time, time_to_percent

logger = logging.getLogger(__name__)


class TimelineController(QObject):
    """
    Mirrors the player's clock for rendering and turns timeline clicks into seeks.

    current_time/duration are always overwritten with the player's latest
    values, so high-frequency timeupdate ticks never accumulate state.

    Emits:
      - time_changed(float seconds)
      - duration_changed(float seconds)
    """
    time_changed = pyqtSignal(float)
    duration_changed = pyqtSignal(float)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._player: Optional[PlayerControl] = None
        self._current_time: float = 0.0
        self._duration: float = 0.0

    # ---------------- Player binding ----------------

    def attach(self, player: PlayerControl) -> None:
        if self._player is not None:
            self.detach()
        self._player = player
        player.on(TIMEUPDATE, self._on_timeupdate)
        player.on(DURATIONCHANGE, self._on_durationchange)
        self._on_durationchange()
        self._on_timeupdate()

    def detach(self) -> None:
        player = self._player
        self._player = None
        if player is not None:
            player.off(TIMEUPDATE, self._on_timeupdate)
            player.off(DURATIONCHANGE, self._on_durationchange)
        self._set_time(0.0)
        self._set_duration(0.0)

    def player(self) -> Optional[PlayerControl]:
        return self._player

    # ---------------- State ----------------

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def duration(self) -> float:
        return self._duration

    def playhead_percent(self) -> float:
        return time_to_percent(self._current_time, self._duration)

    def sample_current_time(self) -> float:
        """Read the clock straight from the player (falls back to the mirrored value)."""
        if is_available(self._player):
            self._set_time(coerce_seconds(self._player.current_time()))
        return self._current_time

    # ---------------- Seeking ----------------

    def seek(self, seconds: float) -> Optional[float]:
        if not is_available(self._player) or self._duration <= 0:
            return None
        target = max(0.0, min(coerce_seconds(seconds), self._duration))
        self._player.seek(target)
        return target

    def on_timeline_click(self, position_px: float, track_width_px: float) -> Optional[float]:
        """Seek to the time under a click on the timeline track. Returns the target, or None."""
        if not is_available(self._player) or self._duration <= 0:
            return None
        target = percent_to_time(position_px, track_width_px, self._duration)
        self._player.seek(target)
        logger.debug("Timeline seek to %.3fs", target)
        return target

    # ---------------- Player callbacks ----------------

    def _on_timeupdate(self) -> None:
        if not is_available(self._player):
            return
        self._set_time(coerce_seconds(self._player.current_time()))

    def _on_durationchange(self) -> None:
        if not is_available(self._player):
            return
        self._set_duration(coerce_seconds(self._player.duration()))

    def _set_time(self, t: float) -> None:
        self._current_time = t
        self.time_changed.emit(t)

    def _set_duration(self, d: float) -> None:
        self._duration = d
        self.duration_changed.emit(d)
