# timeline_annotator/main_window.py
from __future__ import annotations

import logging
import os
from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtMultimediaWidgets import QVideoWidget
from PyQt5.QtWidgets import (
    QAction,
    QApplication,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSizePolicy,
    QSplitter,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from .dialogs.add_annotation import AddAnnotationDialog
from .dialogs.add_label import AddLabelDialog
from .domain import THEME_DARK, THEME_LIGHT, AppConfig
from .export import write_csv_export_to
from .media import APP_TITLE, VIDEO_FILE_FILTER, validate_local_video_path, window_title
from .qt_player import QtPlayerControl
from .session import AnnotationSession
from .settings import save_theme_mode
from .theme import apply_theme, timeline_track_color
from .timeutils import format_time
from .widgets.annotation_timeline import AnnotationTimeline
from .widgets.annotations_list import AnnotationsList
from .widgets.labels_panel import LabelsPanel
from .widgets.marker_slider import MarkerSlider, SliderMarkerOverlay

logger = logging.getLogger(__name__)

PAGE_EMPTY = 0
PAGE_VIDEO = 1


class MainWindow(QMainWindow):
    def __init__(self, config: Optional[AppConfig] = None, video_path: Optional[str] = None):
        super().__init__()
        self.setWindowTitle(window_title(None))
        self.resize(1280, 860)

        self.config = config or AppConfig()
        self.session = AnnotationSession(self.config, parent=self)
        self._theme_mode = self.config.theme_mode
        self._player: Optional[QtPlayerControl] = None

        # Scrub (drag slider) behavior: pause while dragging, resume only if it was playing.
        self._user_scrubbing = False
        self._scrub_was_playing = False

        self._build_ui()
        self._connect_session()
        self._refresh_labels()
        self._refresh_annotations()

        if video_path:
            self.open_video(video_path)

    # ---------------- UI ----------------

    def _build_ui(self):
        self._build_menu()

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(8, 8, 8, 8)
        main_layout.setSpacing(6)

        title = QLabel(f"<h2>{APP_TITLE}</h2>")
        subtitle = QLabel("Annotate your video with labels")
        subtitle.setEnabled(False)
        main_layout.addWidget(title)
        main_layout.addWidget(subtitle)

        self.pages = QStackedWidget()
        main_layout.addWidget(self.pages, stretch=1)

        # ===== Empty state =====
        empty = QWidget()
        empty_lay = QVBoxLayout(empty)
        empty_lay.addStretch()
        msg = QLabel("No video selected")
        msg.setAlignment(Qt.AlignCenter)
        empty_lay.addWidget(msg)
        self.btn_select_video = QPushButton("Select a video")
        self.btn_select_video.setCursor(Qt.PointingHandCursor)
        self.btn_select_video.clicked.connect(self._choose_video)
        empty_lay.addWidget(self.btn_select_video, alignment=Qt.AlignCenter)
        empty_lay.addStretch()
        self.pages.addWidget(empty)  # PAGE_EMPTY

        # ===== Annotation page: labels (left) + video/timeline/list (right) =====
        split = QSplitter(Qt.Horizontal)

        self.labels_panel = LabelsPanel()
        self.labels_panel.setMinimumWidth(240)
        self.labels_panel.add_label_requested.connect(self._add_label)
        self.labels_panel.add_annotation_requested.connect(self._add_annotation)
        split.addWidget(self.labels_panel)

        right = QWidget()
        right_lay = QVBoxLayout(right)
        right_lay.setContentsMargins(0, 0, 0, 0)
        right_lay.setSpacing(6)

        self.video_widget = QVideoWidget()
        self.video_widget.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.video_widget.setStyleSheet("background-color: black;")
        right_lay.addWidget(self.video_widget, stretch=8)

        play_bar = QHBoxLayout()
        play_bar.setSpacing(8)
        self.btn_play = QPushButton("Play")
        self.btn_play.setCursor(Qt.PointingHandCursor)
        self.btn_play.clicked.connect(self._toggle_play)
        self.time_label = QLabel("0:00 / 0:00")
        play_bar.addWidget(self.btn_play)
        play_bar.addWidget(self.time_label)
        play_bar.addStretch()
        right_lay.addLayout(play_bar)

        self.slider = MarkerSlider(Qt.Horizontal)
        self.slider.setRange(0, 0)
        self.slider.sliderPressed.connect(self._on_slider_pressed)
        self.slider.sliderReleased.connect(self._on_slider_released)
        self.slider.sliderMoved.connect(self._on_slider_moved)
        self.slider.marker_clicked.connect(self.session.timeline.seek)
        right_lay.addWidget(self.slider)

        timeline_box = QGroupBox("Timeline")
        tl_lay = QVBoxLayout(timeline_box)
        tl_lay.setContentsMargins(6, 6, 6, 6)
        self.timeline = AnnotationTimeline()
        self.timeline.track_clicked.connect(self.session.seek_from_timeline)
        tl_lay.addWidget(self.timeline)
        right_lay.addWidget(timeline_box)

        self.annotations_list = AnnotationsList()
        self.annotations_list.delete_requested.connect(self.session.remove_annotation)
        self.annotations_list.export_requested.connect(self._export_csv)
        right_lay.addWidget(self.annotations_list, stretch=4)

        split.addWidget(right)
        split.setStretchFactor(0, 2)
        split.setStretchFactor(1, 8)
        self.pages.addWidget(split)  # PAGE_VIDEO

        self.pages.setCurrentIndex(PAGE_EMPTY)
        self._apply_theme_to_widgets()

    def _build_menu(self):
        file_menu = self.menuBar().addMenu("&File")

        act_open = QAction("&Open Video…", self)
        act_open.setShortcut("Ctrl+O")
        act_open.triggered.connect(self._choose_video)
        file_menu.addAction(act_open)

        self.act_export = QAction("&Export CSV…", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self._export_csv)
        self.act_export.setEnabled(False)
        file_menu.addAction(self.act_export)

        file_menu.addSeparator()
        act_quit = QAction("&Quit", self)
        act_quit.setShortcut("Ctrl+Q")
        act_quit.triggered.connect(self.close)
        file_menu.addAction(act_quit)

        view_menu = self.menuBar().addMenu("&View")
        self.act_dark = QAction("&Dark Mode", self)
        self.act_dark.setCheckable(True)
        self.act_dark.setChecked(self._theme_mode == THEME_DARK)
        self.act_dark.toggled.connect(self._on_dark_toggled)
        view_menu.addAction(self.act_dark)

    def _connect_session(self):
        s = self.session
        s.registry.labels_changed.connect(self._refresh_labels)
        s.store.annotations_changed.connect(self._refresh_annotations)
        s.store.removal_state_changed.connect(lambda _id, _state: self._refresh_annotations())
        s.timeline.time_changed.connect(self._on_time_changed)
        s.timeline.duration_changed.connect(self._on_duration_changed)
        s.video_changed.connect(self._on_video_changed)

    # ---------------- Video ----------------

    def _choose_video(self):
        path, _ = QFileDialog.getOpenFileName(self, "Select a video", "", VIDEO_FILE_FILTER)
        if path:
            self.open_video(path)

    def open_video(self, path: str) -> bool:
        ok, msg = validate_local_video_path(path)
        if not ok:
            logger.info("Rejected video %s: %s", path, msg)
            QMessageBox.warning(self, "Invalid video", msg)
            return False

        # Release the previous player before a new one binds to the video widget.
        self.session.release()
        self._player = QtPlayerControl(self.video_widget, path)
        self.session.open_video(path, self._player, SliderMarkerOverlay(self.slider))
        self._update_play_button()
        return True

    def _on_video_changed(self, path: str):
        if path:
            self.setWindowTitle(window_title(path))
            self.pages.setCurrentIndex(PAGE_VIDEO)
        else:
            self._player = None
            self.setWindowTitle(window_title(None))
            self.pages.setCurrentIndex(PAGE_EMPTY)
        self.act_export.setEnabled(bool(path))

    # ---------------- Playback ----------------

    def _toggle_play(self):
        if self._player is None or self._player.disposed:
            return
        self._player.toggle_play()
        self._update_play_button()

    def _update_play_button(self):
        playing = self._player is not None and self._player.is_playing()
        self.btn_play.setText("Pause" if playing else "Play")

    def _on_time_changed(self, seconds: float):
        self.labels_panel.set_current_time(seconds)
        self._update_time_label()
        tl = self.session.timeline
        self.timeline.set_playhead(tl.playhead_percent(), tl.duration > 0)
        if not self._user_scrubbing:
            self._set_slider_value(int(round(seconds * 1000.0)))
        self._update_play_button()

    def _on_duration_changed(self, seconds: float):
        self.slider.blockSignals(True)
        try:
            self.slider.setRange(0, max(0, int(round(seconds * 1000.0))))
        finally:
            self.slider.blockSignals(False)
        self._update_time_label()
        self._refresh_timeline()

    def _update_time_label(self):
        tl = self.session.timeline
        self.time_label.setText(f"{format_time(tl.current_time)} / {format_time(tl.duration)}")

    def _set_slider_value(self, ms: int):
        self.slider.blockSignals(True)
        try:
            self.slider.setValue(int(ms))
        finally:
            self.slider.blockSignals(False)

    def _on_slider_pressed(self):
        if self._player is None:
            return
        self._user_scrubbing = True
        self._scrub_was_playing = self._player.is_playing()
        if self._scrub_was_playing:
            self._player.pause()

    def _on_slider_moved(self, pos_ms: int):
        self.session.timeline.seek(int(pos_ms) / 1000.0)

    def _on_slider_released(self):
        self._user_scrubbing = False
        self.session.timeline.seek(int(self.slider.value()) / 1000.0)
        if self._scrub_was_playing and self._player is not None:
            self._player.play()
        self._scrub_was_playing = False
        self._update_play_button()

    # ---------------- Labels / annotations ----------------

    def _add_label(self):
        result = AddLabelDialog.get_label(self, self.config.label_colors)
        if result is None:
            return
        name, color = result
        self.session.create_label(name, color)

    def _add_annotation(self):
        labels = self.session.labels()
        if not labels:
            return
        draft = AddAnnotationDialog.get_draft(self.session.new_draft(), labels, self)
        if draft is None:
            return
        self.session.submit_draft(draft)

    def _refresh_labels(self):
        labels = self.session.labels()
        self.labels_panel.set_labels(labels)
        self.labels_panel.set_annotating_enabled(bool(labels))

    def _refresh_annotations(self):
        store = self.session.store
        self.annotations_list.set_annotations(store.list_for_display(), store.pending_ids())
        self._refresh_timeline()

    def _refresh_timeline(self):
        self.timeline.set_segments(self.session.segments())

    # ---------------- Export ----------------

    def _export_csv(self):
        if not self.session.has_video():
            return
        export = self.session.export_csv()
        start_dir = os.path.dirname(self.session.video_path or "")
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Export CSV",
            os.path.join(start_dir, export.filename),
            "CSV files (*.csv)",
        )
        if not path:
            return
        try:
            write_csv_export_to(export, path)
        except OSError as e:
            logger.warning("CSV export to %s failed: %s", path, e)
            QMessageBox.warning(self, "Export failed", str(e))
            return
        self.statusBar().showMessage(f"Exported {self.session.store.count()} annotation(s) to {path}", 5000)

    # ---------------- Theme ----------------

    def _on_dark_toggled(self, checked: bool):
        self._theme_mode = save_theme_mode(THEME_DARK if checked else THEME_LIGHT)
        app = QApplication.instance()
        if app is not None:
            apply_theme(app, self._theme_mode)
        self._apply_theme_to_widgets()

    def _apply_theme_to_widgets(self):
        self.timeline.set_track_color(timeline_track_color(self._theme_mode))

    # ---------------- Shutdown ----------------

    def closeEvent(self, event):
        self.session.close()
        super().closeEvent(event)
