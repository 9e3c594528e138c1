# timeline_annotator/widgets/labels_panel.py
from __future__ import annotations

from typing import List, Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QColor, QIcon, QPixmap
from PyQt5.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..domain import Label
from ..timeutils import format_time


def color_swatch_icon(color_hex: str, size: int = 12) -> QIcon:
    pm = QPixmap(size, size)
    pm.fill(QColor(color_hex))
    return QIcon(pm)


class LabelsPanel(QGroupBox):
    """
    Left panel: label list with color swatches, "+ Add Label", and the
    "Add Annotation" box (only shown once at least one label exists).

    Emits:
      - add_label_requested()
      - add_annotation_requested()
    """
    add_label_requested = pyqtSignal()
    add_annotation_requested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__("Labels", parent)
        self._labels: List[Label] = []
        self._build_ui()

    # ---------------- UI ----------------

    def _build_ui(self):
        layout = QVBoxLayout()
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(6)
        self.setLayout(layout)

        head = QHBoxLayout()
        hint = QLabel("ⓘ")
        hint.setToolTip(
            "Create custom labels with colors to categorize your video annotations. "
            "Labels can be applied to specific timestamps or time ranges during playback."
        )
        head.addWidget(hint)
        head.addStretch()
        self.btn_add_label = QPushButton("+ Add Label")
        self.btn_add_label.setCursor(Qt.PointingHandCursor)
        self.btn_add_label.clicked.connect(self.add_label_requested.emit)
        head.addWidget(self.btn_add_label)
        layout.addLayout(head)

        self.empty_label = QLabel("No labels yet\nCreate labels to start annotating")
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setEnabled(False)
        layout.addWidget(self.empty_label)

        self.list = QListWidget()
        self.list.setSelectionMode(QListWidget.NoSelection)
        layout.addWidget(self.list, stretch=1)

        self.annotate_box = QGroupBox("Add Annotation")
        box_lay = QVBoxLayout(self.annotate_box)
        box_lay.setContentsMargins(6, 6, 6, 6)
        self.current_time_label = QLabel("Current time: 0:00")
        self.current_time_label.setToolTip("Add a timestamp or time range with a label and optional notes.")
        box_lay.addWidget(self.current_time_label)
        self.btn_add_annotation = QPushButton("+ Add Annotation at Current Time")
        self.btn_add_annotation.setCursor(Qt.PointingHandCursor)
        self.btn_add_annotation.clicked.connect(self.add_annotation_requested.emit)
        box_lay.addWidget(self.btn_add_annotation)
        layout.addWidget(self.annotate_box)

        self.refresh()

    # ---------------- Public API ----------------

    def set_labels(self, labels: List[Label]) -> None:
        self._labels = list(labels or [])
        self.refresh()

    def set_current_time(self, seconds: float) -> None:
        self.current_time_label.setText(f"Current time: {format_time(seconds)}")

    def set_annotating_enabled(self, enabled: bool) -> None:
        self.btn_add_annotation.setEnabled(bool(enabled))

    def refresh(self) -> None:
        self.list.clear()
        for label in self._labels:
            item = QListWidgetItem(color_swatch_icon(label.color), label.name)
            item.setData(Qt.UserRole, label.id)
            self.list.addItem(item)

        has_labels = bool(self._labels)
        self.empty_label.setVisible(not has_labels)
        self.list.setVisible(has_labels)
        self.annotate_box.setVisible(has_labels)
