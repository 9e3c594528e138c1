# timeline_annotator/markers.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from .annotations import AnnotationStore
from .domain import Annotation
from .player import MarkerOverlay, is_available

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = " – "


@dataclass(frozen=True)
class Marker:
    time: float
    text: str


def marker_text(annotation: Annotation, separator: str = DEFAULT_SEPARATOR) -> str:
    parts = [p for p in (annotation.label_name, annotation.notes) if p]
    return separator.join(parts) or annotation.label_name


def build_markers(annotations: Iterable[Annotation], separator: str = DEFAULT_SEPARATOR) -> List[Marker]:
    return [Marker(time=float(a.start), text=marker_text(a, separator)) for a in annotations]


class MarkerSyncAdapter(QObject):
    """
    Keeps the player's marker overlay equal to the annotation store.

    Every store change rebuilds the full marker list and hands it to the
    overlay in one reset() call. Annotations that are fading out still have a
    marker until they are purged.

    Emits:
      - markers_synced(list[Marker]) after each push to a live overlay
    """
    markers_synced = pyqtSignal(object)

    def __init__(
        self,
        store: AnnotationStore,
        separator: str = DEFAULT_SEPARATOR,
        parent: Optional[QObject] = None,
    ):
        # Defaults to the store as owner; the adapter has to live as long as its connection.
        super().__init__(parent if parent is not None else store)
        self._store = store
        self._separator = separator
        self._overlay: Optional[MarkerOverlay] = None
        self._connected = False

    # ---------------- Public API ----------------

    def overlay(self) -> Optional[MarkerOverlay]:
        return self._overlay

    def attach(self, overlay: MarkerOverlay) -> None:
        if self._overlay is not None and self._overlay is not overlay:
            self.detach()
        self._overlay = overlay
        if not self._connected:
            self._store.annotations_changed.connect(self.sync)
            self._connected = True
        self.sync()

    def detach(self) -> None:
        """Stop listening to the store and destroy the overlay."""
        if self._connected:
            self._store.annotations_changed.disconnect(self.sync)
            self._connected = False
        overlay = self._overlay
        self._overlay = None
        if is_available(overlay):
            overlay.destroy()

    def current_markers(self) -> List[Marker]:
        return build_markers(self._store.annotations(), self._separator)

    def sync(self) -> None:
        overlay = self._overlay
        if not is_available(overlay):
            return
        markers = self.current_markers()
        overlay.reset(markers)
        logger.debug("Synced %d marker(s)", len(markers))
        self.markers_synced.emit(markers)
