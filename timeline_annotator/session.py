# timeline_annotator/session.py
from __future__ import annotations

import logging
from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from .annotations import AnnotationStore, Scheduler
from .domain import (
    ANNOTATION_POINT,
    Annotation,
    AnnotationDraft,
    AppConfig,
    Label,
)
from .export import CsvExport, export_csv
from .labels import LabelRegistry
from .markers import MarkerSyncAdapter
from .media import video_display_name
from .player import MarkerOverlay, PlayerControl, is_available
from .timeline import TimelineController
from .timeutils import SegmentLayout, layout_segments

logger = logging.getLogger(__name__)


class AnnotationSession(QObject):
    """
    Everything that belongs to the annotation page: labels, annotations, the
    open video and the player/overlay pair bound to it.

    The player and overlay are owned exclusively by the session. Releasing
    them always happens in the same order: player listeners detached, marker
    overlay destroyed, player disposed.

    Emits:
      - video_changed(str path) ("" once the video is released)
    """
    video_changed = pyqtSignal(str)

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        scheduler: Optional[Scheduler] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.config = config or AppConfig()

        self.registry = LabelRegistry(self)
        self.store = AnnotationStore(
            self.registry,
            removal_delay_ms=self.config.removal_delay_ms,
            scheduler=scheduler,
            parent=self,
        )
        self.marker_sync = MarkerSyncAdapter(self.store, separator=self.config.marker_separator, parent=self)
        self.timeline = TimelineController(self)

        self._player: Optional[PlayerControl] = None
        self._video_path: Optional[str] = None

    # ---------------- Video / player lifecycle ----------------

    @property
    def player(self) -> Optional[PlayerControl]:
        return self._player

    @property
    def video_path(self) -> Optional[str]:
        return self._video_path

    def has_video(self) -> bool:
        return bool(self._video_path)

    def open_video(self, path: str, player: PlayerControl, overlay: Optional[MarkerOverlay] = None) -> None:
        """
        Bind a new video. The previous player/overlay (if any) is released first.
        Annotations are tied to one video, so they are cleared; labels are kept.
        """
        self.release()

        self._video_path = path
        self._player = player
        self.store.clear()
        self.timeline.attach(player)
        if overlay is not None:
            self.marker_sync.attach(overlay)

        logger.info("Opened video %s", path)
        self.video_changed.emit(path)

    def release(self) -> None:
        player = self._player
        had_video = self._video_path is not None

        self.timeline.detach()
        self.marker_sync.detach()
        if is_available(player):
            player.dispose()

        self._player = None
        self._video_path = None
        if had_video:
            logger.info("Released video")
            self.video_changed.emit("")

    def close(self) -> None:
        self.release()

    # ---------------- Labels ----------------

    def create_label(self, name: str, color: str) -> Optional[Label]:
        return self.registry.create_label(name, color)

    def labels(self) -> List[Label]:
        return self.registry.labels()

    # ---------------- Annotations ----------------

    def new_draft(self) -> AnnotationDraft:
        """A point draft starting (and ending) at the player's current time."""
        t = self.timeline.sample_current_time()
        return AnnotationDraft(type=ANNOTATION_POINT, start=t, end=t)

    def submit_draft(self, draft: AnnotationDraft) -> Optional[Annotation]:
        if not draft.can_submit():
            return None
        return self.store.add_annotation(draft.type, draft.start, draft.end, draft.label_id, draft.notes)

    def add_annotation(self, annotation_type: str, start, end, label_id: str, notes: Optional[str] = None) -> Optional[Annotation]:
        return self.store.add_annotation(annotation_type, start, end, label_id, notes)

    def remove_annotation(self, annotation_id: str) -> None:
        self.store.remove_annotation(annotation_id)

    def list_for_display(self) -> List[Annotation]:
        return self.store.list_for_display()

    def segments(self) -> List[SegmentLayout]:
        return layout_segments(
            self.store.list_for_display(),
            self.timeline.duration,
            pending_ids=self.store.pending_ids(),
            min_percent=self.config.min_segment_percent,
            separator=self.config.marker_separator,
        )

    # ---------------- Timeline ----------------

    def seek_from_timeline(self, position_px: float, track_width_px: float) -> Optional[float]:
        return self.timeline.on_timeline_click(position_px, track_width_px)

    # ---------------- Export ----------------

    def export_csv(self) -> CsvExport:
        return export_csv(
            self.store.annotations(),
            filename_base=video_display_name(self._video_path) or None,
            quote_fields=self.config.csv_quote_fields,
        )
