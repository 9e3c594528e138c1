"""Shared fixtures: fake player/overlay/scheduler standing in for Qt multimedia."""

from typing import Callable, List, Optional, Sequence, Tuple

import pytest
from PyQt5.QtCore import QCoreApplication

from timeline_annotator.annotations import AnnotationStore
from timeline_annotator.labels import LabelRegistry
from timeline_annotator.player import DURATIONCHANGE, TIMEUPDATE, MarkerOverlay, PlayerControl


class ManualScheduler:
    """Scheduler with a fake clock; callbacks run only when advance() passes their due time."""

    def __init__(self) -> None:
        self.now = 0
        self.calls: List[Tuple[int, Callable[[], None]]] = []
        self._pending: List[Tuple[int, Callable[[], None]]] = []

    def __call__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.calls.append((delay_ms, callback))
        self._pending.append((self.now + int(delay_ms), callback))

    def advance(self, ms: int) -> None:
        self.now += int(ms)
        due = [p for p in self._pending if p[0] <= self.now]
        self._pending = [p for p in self._pending if p[0] > self.now]
        for _when, cb in sorted(due, key=lambda p: p[0]):
            cb()

    @property
    def pending_count(self) -> int:
        return len(self._pending)


class FakePlayer(PlayerControl):
    def __init__(self, duration: float = 0.0, current: float = 0.0, log: Optional[List[str]] = None) -> None:
        super().__init__()
        self._duration = duration
        self._time = current
        self.seeks: List[float] = []
        self.log = log if log is not None else []

    def current_time(self) -> float:
        return self._time

    def duration(self) -> float:
        return self._duration

    def seek(self, seconds: float) -> None:
        self.seeks.append(seconds)
        self._time = seconds
        self.emit(TIMEUPDATE)

    def tick(self, seconds: float) -> None:
        self._time = seconds
        self.emit(TIMEUPDATE)

    def set_duration(self, seconds: float) -> None:
        self._duration = seconds
        self.emit(DURATIONCHANGE)

    def off(self, event: str, callback) -> None:
        self.log.append(f"player.off:{event}")
        super().off(event, callback)

    def dispose(self) -> None:
        self.log.append("player.dispose")
        super().dispose()


class FakeOverlay(MarkerOverlay):
    def __init__(self, log: Optional[List[str]] = None) -> None:
        self.resets: List[list] = []
        self._destroyed = False
        self.log = log if log is not None else []

    @property
    def disposed(self) -> bool:
        return self._destroyed

    @property
    def markers(self) -> list:
        return self.resets[-1] if self.resets else []

    def reset(self, markers: Sequence) -> None:
        self.resets.append(list(markers))

    def destroy(self) -> None:
        self.log.append("overlay.destroy")
        self._destroyed = True


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def registry() -> LabelRegistry:
    return LabelRegistry()


@pytest.fixture
def store(registry: LabelRegistry, scheduler: ManualScheduler) -> AnnotationStore:
    return AnnotationStore(registry, removal_delay_ms=180, scheduler=scheduler)


@pytest.fixture
def smile(registry: LabelRegistry):
    return registry.create_label("Smile", "#e53935")
