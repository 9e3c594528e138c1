# timeline_annotator/widgets/annotation_timeline.py
from __future__ import annotations

from typing import List, Optional

from PyQt5.QtCore import QRect, QRectF, QSize, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QPainter, QPen
from PyQt5.QtWidgets import QSizePolicy, QToolTip, QWidget

from ..timeutils import SegmentLayout

TRACK_HEIGHT_PX = 32
MIN_SEGMENT_PX = 4


class AnnotationTimeline(QWidget):
    """
    Clickable track under the video: one colored segment per annotation plus a
    red playhead. Positions come in as percentages (see timeutils.layout_segments).

    Emits:
      - track_clicked(x_px, track_width_px) for left clicks anywhere on the track
    """
    track_clicked = pyqtSignal(float, float)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._segments: List[SegmentLayout] = []
        self._playhead_percent: float = 0.0
        self._has_duration = False

        self._bg = QColor("#e0e0e0")
        self._playhead_color = QColor("#d32f2f")

        self.setMinimumHeight(TRACK_HEIGHT_PX)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setMouseTracking(True)
        self.setCursor(Qt.PointingHandCursor)

    def sizeHint(self) -> QSize:
        return QSize(600, TRACK_HEIGHT_PX)

    # ---------------- Public API ----------------

    def set_segments(self, segments: List[SegmentLayout]) -> None:
        self._segments = list(segments or [])
        self.update()

    def set_playhead(self, percent: float, has_duration: bool) -> None:
        self._playhead_percent = max(0.0, min(float(percent), 100.0))
        self._has_duration = bool(has_duration)
        self.update()

    def set_track_color(self, color_hex: str) -> None:
        self._bg = QColor(color_hex)
        self.update()

    # ---------------- Geometry ----------------

    def _segment_rect(self, seg: SegmentLayout) -> QRectF:
        w = float(self.width())
        x = w * seg.left_percent / 100.0
        width = max(w * seg.width_percent / 100.0, float(MIN_SEGMENT_PX))
        return QRectF(x, 0.0, width, float(self.height()))

    def _segment_at(self, x: float) -> Optional[SegmentLayout]:
        for seg in reversed(self._segments):
            r = self._segment_rect(seg)
            if r.left() <= x <= r.right():
                return seg
        return None

    # ---------------- Painting ----------------

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        painter.setPen(Qt.NoPen)
        painter.setBrush(self._bg)
        painter.drawRoundedRect(QRectF(self.rect()), 4.0, 4.0)

        for seg in self._segments:
            c = QColor(seg.color)
            if seg.pending:
                c.setAlpha(70)
            painter.setBrush(c)
            painter.drawRoundedRect(self._segment_rect(seg), 2.0, 2.0)

        x = int(round(self.width() * self._playhead_percent / 100.0)) if self._has_duration else 0
        painter.setPen(QPen(self._playhead_color, 2))
        painter.drawLine(x, 0, x, self.height())

        painter.end()

    # ---------------- Interaction ----------------

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        self.track_clicked.emit(float(event.pos().x()), float(self.width()))
        event.accept()

    def mouseMoveEvent(self, event):
        seg = self._segment_at(float(event.pos().x()))
        if seg is not None:
            QToolTip.showText(event.globalPos(), seg.title, self, QRect())
        else:
            QToolTip.hideText()
        return super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        QToolTip.hideText()
        return super().leaveEvent(event)
