# timeline_annotator/player.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Sequence

# Events a PlayerControl reports to its listeners.
TIMEUPDATE = "timeupdate"
DURATIONCHANGE = "durationchange"
PLAYER_EVENTS = (TIMEUPDATE, DURATIONCHANGE)


class PlayerControl(ABC):
    """
    The parts of a media player the annotation engine talks to.

    Times are seconds. Listeners are called with no arguments and read the
    current values back from the player.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable[[], None]]] = {e: [] for e in PLAYER_EVENTS}
        self._disposed = False

    # ---------------- Playback surface ----------------

    @abstractmethod
    def current_time(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def duration(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def seek(self, seconds: float) -> None:
        raise NotImplementedError

    # ---------------- Events ----------------

    def on(self, event: str, callback: Callable[[], None]) -> None:
        if event not in self._listeners:
            raise ValueError(f"Unknown player event: {event}")
        if callback not in self._listeners[event]:
            self._listeners[event].append(callback)

    def off(self, event: str, callback: Callable[[], None]) -> None:
        callbacks = self._listeners.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str) -> None:
        if self._disposed:
            return
        for cb in list(self._listeners.get(event, [])):
            cb()

    # ---------------- Lifecycle ----------------

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        self._disposed = True
        for callbacks in self._listeners.values():
            callbacks.clear()


class MarkerOverlay(ABC):
    """
    Marker strip drawn over the player's progress bar.

    The marker list is owned by the sync adapter: every update replaces it.
    """

    @property
    @abstractmethod
    def disposed(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def reset(self, markers: Sequence) -> None:
        raise NotImplementedError

    @abstractmethod
    def destroy(self) -> None:
        raise NotImplementedError


def is_available(obj) -> bool:
    """True for a player/overlay that exists and has not been disposed."""
    return obj is not None and not getattr(obj, "disposed", False)
