# timeline_annotator/dialogs/add_label.py
from __future__ import annotations

from typing import Dict, Optional, Sequence

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QButtonGroup,
    QDialog,
    QDialogButtonBox,
    QGridLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from ..domain import LABEL_COLORS

SWATCH_PX = 32


class AddLabelDialog(QDialog):
    """
    Collects a label name and one of the palette colors.

    Create stays disabled while the trimmed name is empty. The dialog does not
    touch the registry; the caller reads label_name()/label_color() on accept.
    """

    def __init__(self, parent=None, colors: Sequence[str] = LABEL_COLORS):
        super().__init__(parent)
        self.setWindowTitle("Add Label")
        self.setModal(True)

        self._colors = list(colors) or list(LABEL_COLORS)
        self._color = self._colors[0]
        self._swatches: Dict[str, QPushButton] = {}

        self._build_ui()
        self._update_enabled_state()

    def _build_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(10)

        layout.addWidget(QLabel("Label Name"))
        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("e.g. Smile, Surprise")
        self.name_edit.setAccessibleName("Label name")
        self.name_edit.textChanged.connect(self._update_enabled_state)
        layout.addWidget(self.name_edit)

        layout.addWidget(QLabel("Color"))
        grid = QGridLayout()
        grid.setSpacing(8)
        group = QButtonGroup(self)
        group.setExclusive(True)
        for i, color in enumerate(self._colors):
            btn = QPushButton()
            btn.setCheckable(True)
            btn.setFixedSize(SWATCH_PX, SWATCH_PX)
            btn.setCursor(Qt.PointingHandCursor)
            btn.setAccessibleName(f"Select color {color}")
            btn.setStyleSheet(
                f"QPushButton {{ background-color: {color}; border-radius: {SWATCH_PX // 2}px;"
                f" border: 3px solid transparent; }}"
                f"QPushButton:checked {{ border-color: #424242; }}"
            )
            btn.clicked.connect(lambda _checked, c=color: self._select_color(c))
            group.addButton(btn)
            grid.addWidget(btn, i // 5, i % 5)
            self._swatches[color] = btn
        layout.addLayout(grid)
        self._swatches[self._color].setChecked(True)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.btn_create = buttons.button(QDialogButtonBox.Ok)
        self.btn_create.setText("Create Label")
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _select_color(self, color: str) -> None:
        self._color = color

    def _update_enabled_state(self) -> None:
        self.btn_create.setEnabled(bool(self.label_name()))

    def _on_accept(self) -> None:
        if not self.label_name():
            return
        self.accept()

    # ---------------- Results ----------------

    def label_name(self) -> str:
        return self.name_edit.text().strip()

    def label_color(self) -> str:
        return self._color

    @staticmethod
    def get_label(parent=None, colors: Sequence[str] = LABEL_COLORS) -> Optional[tuple]:
        dlg = AddLabelDialog(parent, colors)
        if dlg.exec_() != QDialog.Accepted:
            return None
        return (dlg.label_name(), dlg.label_color())
