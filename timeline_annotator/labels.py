# timeline_annotator/labels.py
from __future__ import annotations

import logging
from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from .domain import LABEL_COLORS, Label, new_id

logger = logging.getLogger(__name__)


class LabelRegistry(QObject):
    """
    Ordered list of user-created labels. Insertion order is display order.

    Labels are never edited or removed once created.

    Emits:
      - labels_changed() after a label was added
    """
    labels_changed = pyqtSignal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._labels: List[Label] = []

    def create_label(self, name: str, color: str = LABEL_COLORS[0]) -> Optional[Label]:
        trimmed = (name or "").strip()
        if not trimmed:
            logger.debug("Ignoring label with empty name")
            return None

        label = Label(id=new_id(), name=trimmed, color=str(color))
        self._labels.append(label)
        logger.debug("Created label %r (%s)", label.name, label.color)
        self.labels_changed.emit()
        return label

    def labels(self) -> List[Label]:
        return list(self._labels)

    def get(self, label_id: str) -> Optional[Label]:
        if not label_id:
            return None
        for label in self._labels:
            if label.id == label_id:
                return label
        return None

    def count(self) -> int:
        return len(self._labels)
