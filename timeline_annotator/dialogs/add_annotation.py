# timeline_annotator/dialogs/add_annotation.py
from __future__ import annotations

from typing import List, Optional

from PyQt5.QtWidgets import (
    QButtonGroup,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QRadioButton,
    QVBoxLayout,
)

from ..domain import ANNOTATION_POINT, ANNOTATION_RANGE, AnnotationDraft, Label
from ..timeutils import format_time
from ..widgets.labels_panel import color_swatch_icon

MAX_SECONDS = 1e7


class AddAnnotationDialog(QDialog):
    """
    Edits an AnnotationDraft: start time, point/range, end time (range only),
    label and notes.

    Add is disabled until a label is chosen (and, for ranges, end >= start).
    """

    def __init__(self, draft: AnnotationDraft, labels: List[Label], parent=None):
        super().__init__(parent)
        self.setWindowTitle("Add Annotation")
        self.setModal(True)
        self.resize(380, 0)

        self._draft = draft
        self._labels = list(labels)

        self._build_ui()
        self._load_draft()
        self._update_enabled_state()

    # ---------------- UI ----------------

    def _build_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(8)

        self.current_label = QLabel(f"Current time: {format_time(self._draft.start)}")
        self.current_label.setEnabled(False)
        layout.addWidget(self.current_label)

        layout.addWidget(QLabel("Start time (seconds)"))
        self.start_spin = self._seconds_spin()
        layout.addWidget(self.start_spin)

        layout.addWidget(QLabel("Annotation Type"))
        type_row = QHBoxLayout()
        self.radio_point = QRadioButton("Point in Time")
        self.radio_range = QRadioButton("Time Range")
        group = QButtonGroup(self)
        group.addButton(self.radio_point)
        group.addButton(self.radio_range)
        type_row.addWidget(self.radio_point)
        type_row.addWidget(self.radio_range)
        type_row.addStretch()
        layout.addLayout(type_row)

        self.end_title = QLabel("End time (seconds)")
        layout.addWidget(self.end_title)
        self.end_spin = self._seconds_spin()
        layout.addWidget(self.end_spin)

        layout.addWidget(QLabel("Select Label"))
        self.label_combo = QComboBox()
        self.label_combo.addItem("Choose a label...", "")
        for label in self._labels:
            self.label_combo.addItem(color_swatch_icon(label.color, 10), label.name, label.id)
        layout.addWidget(self.label_combo)

        layout.addWidget(QLabel("Notes (optional)"))
        self.notes_edit = QPlainTextEdit()
        self.notes_edit.setPlaceholderText("Add any additional notes...")
        self.notes_edit.setFixedHeight(72)
        layout.addWidget(self.notes_edit)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.btn_add = buttons.button(QDialogButtonBox.Ok)
        self.btn_add.setText("Add")
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.start_spin.valueChanged.connect(self._update_enabled_state)
        self.end_spin.valueChanged.connect(self._update_enabled_state)
        self.radio_point.toggled.connect(self._update_enabled_state)
        self.label_combo.currentIndexChanged.connect(self._update_enabled_state)

    def _seconds_spin(self) -> QDoubleSpinBox:
        spin = QDoubleSpinBox()
        spin.setDecimals(3)
        spin.setSingleStep(0.1)
        spin.setRange(0.0, MAX_SECONDS)
        return spin

    def _load_draft(self) -> None:
        d = self._draft
        self.start_spin.setValue(float(d.start))
        self.end_spin.setValue(float(d.end))
        if d.type == ANNOTATION_RANGE:
            self.radio_range.setChecked(True)
        else:
            self.radio_point.setChecked(True)
        idx = self.label_combo.findData(d.label_id) if d.label_id else 0
        self.label_combo.setCurrentIndex(max(0, idx))
        self.notes_edit.setPlainText(d.notes or "")

    # ---------------- State ----------------

    def draft(self) -> AnnotationDraft:
        return AnnotationDraft(
            type=ANNOTATION_RANGE if self.radio_range.isChecked() else ANNOTATION_POINT,
            start=float(self.start_spin.value()),
            end=float(self.end_spin.value()),
            label_id=str(self.label_combo.currentData() or ""),
            notes=self.notes_edit.toPlainText(),
        )

    def _update_enabled_state(self, *_args) -> None:
        is_range = self.radio_range.isChecked()
        self.end_title.setVisible(is_range)
        self.end_spin.setVisible(is_range)
        self.btn_add.setEnabled(self.draft().can_submit())

    def _on_accept(self) -> None:
        if not self.draft().can_submit():
            return
        self.accept()

    @staticmethod
    def get_draft(draft: AnnotationDraft, labels: List[Label], parent=None) -> Optional[AnnotationDraft]:
        dlg = AddAnnotationDialog(draft, labels, parent)
        if dlg.exec_() != QDialog.Accepted:
            return None
        return dlg.draft()
