# timeline_annotator/annotations.py
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from .domain import (
    ANNOTATION_POINT,
    ANNOTATION_RANGE,
    ANNOTATION_TYPES,
    Annotation,
    RemovalState,
    coerce_seconds,
    new_id,
    normalize_notes,
)
from .labels import LabelRegistry

logger = logging.getLogger(__name__)

# scheduler(delay_ms, callback)
Scheduler = Callable[[int, Callable[[], None]], None]

DEFAULT_REMOVAL_DELAY_MS = 180


def qt_single_shot(delay_ms: int, callback: Callable[[], None]) -> None:
    QTimer.singleShot(int(delay_ms), callback)


class AnnotationStore(QObject):
    """
    Holds the annotations for the currently open video.

    Storage keeps insertion order; time order is only computed on read
    (list_for_display). Deletion is two-phase: an annotation is first marked
    pending_removal (the list fades it out), then purged after removal_delay_ms.
    Each annotation tracks its own removal state, so several deletes can be in
    flight at once.

    Emits:
      - annotations_changed() when an annotation is added or purged
      - removal_state_changed(annotation_id, state) on pending_removal / purged
    """
    annotations_changed = pyqtSignal()
    removal_state_changed = pyqtSignal(str, str)

    def __init__(
        self,
        registry: LabelRegistry,
        removal_delay_ms: int = DEFAULT_REMOVAL_DELAY_MS,
        scheduler: Optional[Scheduler] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._registry = registry
        self._removal_delay_ms = max(0, int(removal_delay_ms))
        self._schedule: Scheduler = scheduler or qt_single_shot

        self._annotations: List[Annotation] = []
        self._states: Dict[str, RemovalState] = {}

    # ---------------- Mutations ----------------

    def add_annotation(
        self,
        annotation_type: str,
        start,
        end,
        label_id: str,
        notes: Optional[str] = None,
    ) -> Optional[Annotation]:
        label = self._registry.get(label_id)
        if label is None:
            logger.debug("Ignoring annotation for unknown label id %r", label_id)
            return None
        if annotation_type not in ANNOTATION_TYPES:
            logger.debug("Ignoring annotation with unknown type %r", annotation_type)
            return None

        st = coerce_seconds(start)
        et = st if annotation_type == ANNOTATION_POINT else coerce_seconds(end)
        if annotation_type == ANNOTATION_RANGE and et < st:
            logger.debug("Ignoring inverted range %.3f..%.3f", st, et)
            return None

        annotation = Annotation(
            id=new_id(),
            type=annotation_type,
            start=st,
            end=et,
            label_id=label.id,
            label_name=label.name,
            label_color=label.color,
            notes=normalize_notes(notes),
        )
        self._annotations.append(annotation)
        self._states[annotation.id] = RemovalState.COMMITTED
        self.annotations_changed.emit()
        return annotation

    def remove_annotation(self, annotation_id: str) -> None:
        if self.get(annotation_id) is None:
            return
        if self._states.get(annotation_id) == RemovalState.PENDING_REMOVAL:
            # Already fading out; the first timer purges it.
            return

        self._states[annotation_id] = RemovalState.PENDING_REMOVAL
        self.removal_state_changed.emit(annotation_id, RemovalState.PENDING_REMOVAL.value)
        self._schedule(self._removal_delay_ms, lambda: self._purge(annotation_id))

    def clear(self) -> None:
        self._annotations = []
        self._states = {}
        self.annotations_changed.emit()

    def _purge(self, annotation_id: str) -> None:
        if self._states.get(annotation_id) != RemovalState.PENDING_REMOVAL:
            return
        self._annotations = [a for a in self._annotations if a.id != annotation_id]
        del self._states[annotation_id]
        self.removal_state_changed.emit(annotation_id, RemovalState.PURGED.value)
        self.annotations_changed.emit()

    # ---------------- Reads ----------------

    def annotations(self) -> List[Annotation]:
        """Snapshot in store (insertion) order."""
        return list(self._annotations)

    def list_for_display(self) -> List[Annotation]:
        # sorted() is stable: equal starts keep insertion order.
        return sorted(self._annotations, key=lambda a: a.start)

    def count(self) -> int:
        return len(self._annotations)

    def get(self, annotation_id: str) -> Optional[Annotation]:
        for a in self._annotations:
            if a.id == annotation_id:
                return a
        return None

    def removal_state(self, annotation_id: str) -> Optional[RemovalState]:
        """None for unknown ids and for ids already purged (purge drops the entry)."""
        return self._states.get(annotation_id)

    def is_pending_removal(self, annotation_id: str) -> bool:
        return self._states.get(annotation_id) == RemovalState.PENDING_REMOVAL

    def pending_ids(self) -> List[str]:
        return [a.id for a in self._annotations if self.is_pending_removal(a.id)]
