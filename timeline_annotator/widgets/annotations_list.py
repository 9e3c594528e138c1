# timeline_annotator/widgets/annotations_list.py
from __future__ import annotations

from typing import Iterable, List, Optional, Set

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QGraphicsOpacityEffect,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..domain import Annotation
from ..timeutils import format_span
from .labels_panel import color_swatch_icon

PENDING_OPACITY = 0.35
PENDING_SHIFT_PX = 6


class _AnnotationRow(QWidget):
    delete_clicked = pyqtSignal(str)

    def __init__(self, annotation: Annotation, pending: bool, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.annotation_id = annotation.id

        lay = QHBoxLayout(self)
        # Rows being removed shift left and fade out.
        left = 4 - (PENDING_SHIFT_PX if pending else 0)
        lay.setContentsMargins(max(0, left), 2, 4, 2)
        lay.setSpacing(8)

        swatch = QLabel()
        swatch.setPixmap(color_swatch_icon(annotation.label_color, 10).pixmap(10, 10))
        lay.addWidget(swatch, alignment=Qt.AlignTop)

        text_col = QVBoxLayout()
        text_col.setSpacing(0)
        title = QLabel(f"{annotation.label_name}  <span style='color: gray'>({format_span(annotation)})</span>")
        title.setTextFormat(Qt.RichText)
        text_col.addWidget(title)
        if annotation.notes:
            notes = QLabel(annotation.notes)
            notes.setWordWrap(True)
            notes.setEnabled(False)
            text_col.addWidget(notes)
        lay.addLayout(text_col, stretch=1)

        self.btn_delete = QPushButton("✕")
        self.btn_delete.setToolTip("Delete annotation")
        self.btn_delete.setCursor(Qt.PointingHandCursor)
        self.btn_delete.setFixedWidth(28)
        self.btn_delete.clicked.connect(lambda: self.delete_clicked.emit(self.annotation_id))
        lay.addWidget(self.btn_delete)

        if pending:
            effect = QGraphicsOpacityEffect(self)
            effect.setOpacity(PENDING_OPACITY)
            self.setGraphicsEffect(effect)
            self.btn_delete.setEnabled(False)


class AnnotationsList(QGroupBox):
    """
    Bottom panel: annotations sorted by start time, with per-row delete and
    an Export CSV button.

    Emits:
      - delete_requested(annotation_id)
      - export_requested()
    """
    delete_requested = pyqtSignal(str)
    export_requested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._annotations: List[Annotation] = []
        self._pending: Set[str] = set()
        self._build_ui()

    def _build_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(6)

        head = QHBoxLayout()
        self.title_label = QLabel()
        head.addWidget(self.title_label)
        head.addStretch()
        self.btn_export = QPushButton("Export CSV")
        self.btn_export.setCursor(Qt.PointingHandCursor)
        self.btn_export.clicked.connect(self.export_requested.emit)
        head.addWidget(self.btn_export)
        layout.addLayout(head)

        self.empty_label = QLabel("No annotations yet. Markers appear on the video progress bar when added.")
        self.empty_label.setWordWrap(True)
        self.empty_label.setEnabled(False)
        layout.addWidget(self.empty_label)

        self.list = QListWidget()
        self.list.setSelectionMode(QListWidget.NoSelection)
        layout.addWidget(self.list, stretch=1)

        self.refresh()

    # ---------------- Public API ----------------

    def set_annotations(self, annotations: Iterable[Annotation], pending_ids: Iterable[str] = ()) -> None:
        """annotations are expected in display order (sorted by start)."""
        self._annotations = list(annotations or [])
        self._pending = set(pending_ids or ())
        self.refresh()

    def refresh(self) -> None:
        self.title_label.setText(f"<b>Annotations ({len(self._annotations)})</b>")
        self.list.clear()
        for a in self._annotations:
            row = _AnnotationRow(a, a.id in self._pending)
            row.delete_clicked.connect(self.delete_requested.emit)
            item = QListWidgetItem()
            item.setData(Qt.UserRole, a.id)
            item.setSizeHint(row.sizeHint())
            self.list.addItem(item)
            self.list.setItemWidget(item, row)

        has_rows = bool(self._annotations)
        self.empty_label.setVisible(not has_rows)
        self.list.setVisible(has_rows)
