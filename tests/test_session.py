"""Tests for the annotation session: engine wiring and player/overlay lifecycle."""

import pytest

from timeline_annotator.domain import AppConfig
from timeline_annotator.markers import Marker
from timeline_annotator.player import TIMEUPDATE
from timeline_annotator.session import AnnotationSession

from conftest import FakeOverlay, FakePlayer


@pytest.fixture
def session(scheduler) -> AnnotationSession:
    return AnnotationSession(AppConfig(), scheduler=scheduler)


class TestVideoLifecycle:
    """Opening and releasing videos."""

    def test_open_binds_player_and_overlay(self, session) -> None:
        player, overlay = FakePlayer(duration=120), FakeOverlay()

        session.open_video("/videos/clip.mp4", player, overlay)

        assert session.has_video()
        assert session.player is player
        assert session.timeline.duration == 120
        assert overlay.resets == [[]]

    def test_release_order(self, session) -> None:
        """Listeners off, then overlay destroyed, then player disposed."""
        log = []
        session.open_video("/videos/clip.mp4", FakePlayer(duration=120, log=log), FakeOverlay(log=log))

        session.release()

        assert log == [
            "player.off:timeupdate",
            "player.off:durationchange",
            "overlay.destroy",
            "player.dispose",
        ]
        assert not session.has_video()
        assert session.player is None

    def test_reopen_releases_previous_and_clears_annotations(self, session) -> None:
        old_player, old_overlay = FakePlayer(duration=60), FakeOverlay()
        session.open_video("/videos/a.mp4", old_player, old_overlay)
        label = session.create_label("Smile", "#e53935")
        session.add_annotation("point", 3, 3, label.id)

        new_overlay = FakeOverlay()
        session.open_video("/videos/b.mp4", FakePlayer(duration=90), new_overlay)

        assert old_player.disposed
        assert old_overlay.disposed
        assert old_player.listener_count(TIMEUPDATE) == 0
        assert session.list_for_display() == []
        assert [label.name for label in session.labels()] == ["Smile"]
        assert new_overlay.markers == []

    def test_video_changed_signal(self, session) -> None:
        paths = []
        session.video_changed.connect(paths.append)

        session.open_video("/videos/a.mp4", FakePlayer())
        session.close()
        session.close()

        assert paths == ["/videos/a.mp4", ""]


class TestAnnotating:
    """The label -> draft -> annotation -> marker/export flow."""

    def test_smile_scenario(self, session) -> None:
        player, overlay = FakePlayer(duration=120), FakeOverlay()
        session.open_video("/videos/smile.mp4", player, overlay)
        player.tick(12.5)
        smile = session.create_label("Smile", "#e53935")

        draft = session.new_draft()
        draft.label_id = smile.id
        annotation = session.submit_draft(draft)

        assert (annotation.start, annotation.end) == (12.5, 12.5)
        assert overlay.markers == [Marker(12.5, "Smile")]
        export = session.export_csv()
        assert export.data == b"start,end,label,description\n12.5,12.5,Smile,"
        assert export.filename == "smile-annotations.csv"

    def test_draft_without_label_is_not_submitted(self, session) -> None:
        session.open_video("/videos/a.mp4", FakePlayer(duration=10))
        assert session.submit_draft(session.new_draft()) is None
        assert session.list_for_display() == []

    def test_delete_fades_then_purges(self, session, scheduler) -> None:
        overlay = FakeOverlay()
        session.open_video("/videos/a.mp4", FakePlayer(duration=100), overlay)
        label = session.create_label("Blink", "#43a047")
        a = session.add_annotation("range", 10, 20, label.id)

        session.remove_annotation(a.id)

        assert [s.pending for s in session.segments()] == [True]
        assert overlay.markers == [Marker(10.0, "Blink")]

        scheduler.advance(AppConfig().removal_delay_ms)

        assert session.segments() == []
        assert overlay.markers == []

    def test_segments_use_config(self, scheduler) -> None:
        session = AnnotationSession(AppConfig(min_segment_percent=4.0, marker_separator=" / "), scheduler=scheduler)
        session.open_video("/videos/a.mp4", FakePlayer(duration=100))
        label = session.create_label("Blink", "#43a047")
        session.add_annotation("point", 50, 50, label.id, "eye")

        seg = session.segments()[0]

        assert seg.width_percent == 4.0
        assert seg.title == "Blink / eye"

    def test_export_honours_quote_setting(self, scheduler) -> None:
        session = AnnotationSession(AppConfig(csv_quote_fields=False), scheduler=scheduler)
        label = session.create_label("a,b", "#43a047")
        session.add_annotation("point", 1, 1, label.id)

        assert session.export_csv().data.endswith(b"\n1,1,a,b,")
        assert session.export_csv().filename == "annotations-annotations.csv"


class TestTimelineSeek:
    """Timeline clicks through the session."""

    def test_no_duration_no_seek(self, session) -> None:
        player = FakePlayer(duration=0)
        session.open_video("/videos/a.mp4", player)

        assert session.seek_from_timeline(50, 100) is None
        assert player.seeks == []

    def test_seek(self, session) -> None:
        player = FakePlayer(duration=120)
        session.open_video("/videos/a.mp4", player)

        assert session.seek_from_timeline(25, 100) == pytest.approx(30.0)
        assert session.timeline.current_time == pytest.approx(30.0)

    def test_seek_after_release(self, session) -> None:
        player = FakePlayer(duration=120)
        session.open_video("/videos/a.mp4", player)
        session.release()

        assert session.seek_from_timeline(25, 100) is None
        assert player.seeks == []
