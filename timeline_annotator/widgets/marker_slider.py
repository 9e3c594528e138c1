# timeline_annotator/widgets/marker_slider.py
from __future__ import annotations

from typing import List, Optional, Sequence

from PyQt5.QtCore import QPoint, QRect, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QPainter
from PyQt5.QtWidgets import QSlider, QStyle, QStyleOptionSlider, QToolTip

from ..markers import Marker
from ..player import MarkerOverlay

MARKER_WIDTH_PX = 8
MARKER_COLOR = "#2563eb"


class MarkerSlider(QSlider):
    """
    Playback progress slider (values in ms) with annotation markers on the groove.

    - Dragging the handle scrubs; click-to-jump on the bare groove is disabled
    - Clicking a marker emits marker_clicked(seconds)
    - Hovering a marker shows its text as a tooltip
    - Mouse wheel is ignored (prevents accidental seeks)
    """
    marker_clicked = pyqtSignal(float)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self._markers: List[Marker] = []
        self._hover_idx: Optional[int] = None

        self.setMouseTracking(True)
        self._cursor_on_target = False

    # -------------
    # Marker API
    # -------------

    def set_markers(self, markers: Sequence[Marker]) -> None:
        self._markers = list(markers or [])
        self._hover_idx = None
        self.update()

    def clear_markers(self) -> None:
        self.set_markers([])

    # -------------
    # Geometry
    # -------------

    def _groove_rect(self) -> QRect:
        opt = QStyleOptionSlider()
        self.initStyleOption(opt)
        return self.style().subControlRect(QStyle.CC_Slider, opt, QStyle.SC_SliderGroove, self)

    def _value_to_x(self, value: int, groove: QRect) -> int:
        if self.maximum() <= self.minimum():
            return groove.x()
        v = max(self.minimum(), min(int(value), self.maximum()))
        span = max(1, groove.width())
        return groove.x() + QStyle.sliderPositionFromValue(self.minimum(), self.maximum(), v, span)

    def _marker_rect(self, marker: Marker, groove: QRect) -> QRect:
        x = self._value_to_x(int(round(marker.time * 1000.0)), groove)
        h = max(6, groove.height() + 4)
        y = groove.center().y() - (h // 2)
        return QRect(x - MARKER_WIDTH_PX // 2, y, MARKER_WIDTH_PX, h)

    def _marker_at(self, pos: QPoint) -> Optional[int]:
        if not self._markers or self.maximum() <= self.minimum():
            return None
        groove = self._groove_rect()
        # Topmost (last painted) wins
        for idx in range(len(self._markers) - 1, -1, -1):
            if self._marker_rect(self._markers[idx], groove).adjusted(-1, -3, 1, 3).contains(pos):
                return idx
        return None

    def _click_is_on_handle(self, pos: QPoint) -> bool:
        opt = QStyleOptionSlider()
        self.initStyleOption(opt)
        handle = self.style().subControlRect(QStyle.CC_Slider, opt, QStyle.SC_SliderHandle, self)
        return handle.contains(pos)

    # -------------
    # Interaction
    # -------------

    def _update_hover(self, pos: QPoint, global_pos: QPoint) -> None:
        idx = self._marker_at(pos)
        if idx != self._hover_idx:
            self._hover_idx = idx
            if idx is not None:
                QToolTip.showText(global_pos, self._markers[idx].text, self)
            else:
                QToolTip.hideText()

        on_target = idx is not None or self._click_is_on_handle(pos)
        if on_target and not self._cursor_on_target:
            self._cursor_on_target = True
            self.setCursor(Qt.PointingHandCursor)
        elif not on_target and self._cursor_on_target:
            self._cursor_on_target = False
            self.unsetCursor()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            idx = self._marker_at(event.pos())
            if idx is not None and not self._click_is_on_handle(event.pos()):
                self.marker_clicked.emit(float(self._markers[idx].time))
                event.accept()
                return
            if not self._click_is_on_handle(event.pos()):
                event.ignore()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        self._update_hover(event.pos(), event.globalPos())
        return super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        self._hover_idx = None
        QToolTip.hideText()
        if self._cursor_on_target:
            self._cursor_on_target = False
            self.unsetCursor()
        return super().leaveEvent(event)

    def wheelEvent(self, event):
        event.ignore()

    # -------------
    # Painting
    # -------------

    def paintEvent(self, event):
        super().paintEvent(event)

        if not self._markers or self.maximum() <= self.minimum():
            return

        groove = self._groove_rect()
        if groove.isNull():
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(MARKER_COLOR))
        radius = MARKER_WIDTH_PX * 0.3
        for m in self._markers:
            painter.drawRoundedRect(self._marker_rect(m, groove), radius, radius)
        painter.end()


class SliderMarkerOverlay(MarkerOverlay):
    """
    MarkerOverlay bound to a MarkerSlider for the lifetime of one video.

    The slider widget outlives videos; destroy() only clears what this
    overlay drew and makes further resets no-ops.
    """

    def __init__(self, slider: MarkerSlider):
        self._slider: Optional[MarkerSlider] = slider
        self._slider.clear_markers()

    @property
    def disposed(self) -> bool:
        return self._slider is None

    def reset(self, markers: Sequence[Marker]) -> None:
        if self._slider is None:
            return
        self._slider.set_markers(markers)

    def destroy(self) -> None:
        if self._slider is None:
            return
        self._slider.clear_markers()
        self._slider = None
