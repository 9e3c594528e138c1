"""Tests for the annotation store and its two-phase deletion."""

from timeline_annotator.annotations import AnnotationStore
from timeline_annotator.domain import RemovalState
from timeline_annotator.labels import LabelRegistry


class TestAddAnnotation:
    """Creation rules for point and range annotations."""

    def test_point_forces_end_to_start(self, store: AnnotationStore, smile) -> None:
        """Whatever end is passed, a point ends where it starts."""
        a = store.add_annotation("point", 12.5, 99.0, smile.id)

        assert a.start == 12.5
        assert a.end == 12.5

    def test_label_fields_are_snapshotted(self, store: AnnotationStore, smile) -> None:
        a = store.add_annotation("range", 5, 10, smile.id, "blink")

        assert a.label_id == smile.id
        assert a.label_name == "Smile"
        assert a.label_color == "#e53935"
        assert a.notes == "blink"

    def test_unknown_label_is_a_no_op(self, store: AnnotationStore) -> None:
        """No annotation and no change signal for a label id that does not exist."""
        emitted = []
        store.annotations_changed.connect(lambda: emitted.append(True))

        assert store.add_annotation("point", 1.0, 1.0, "nope") is None
        assert store.count() == 0
        assert emitted == []

    def test_unknown_type_is_a_no_op(self, store: AnnotationStore, smile) -> None:
        assert store.add_annotation("segment", 1.0, 2.0, smile.id) is None
        assert store.count() == 0

    def test_inverted_range_is_rejected(self, store: AnnotationStore, smile) -> None:
        assert store.add_annotation("range", 10.0, 5.0, smile.id) is None
        assert store.count() == 0

    def test_blank_notes_become_none(self, store: AnnotationStore, smile) -> None:
        a = store.add_annotation("point", 1.0, 1.0, smile.id, "   ")
        b = store.add_annotation("point", 2.0, 2.0, smile.id, "  hello ")

        assert a.notes is None
        assert b.notes == "hello"

    def test_bad_numbers_coerce_to_zero(self, store: AnnotationStore, smile) -> None:
        """Non-numeric and negative times are stored as 0."""
        a = store.add_annotation("point", "abc", None, smile.id)
        b = store.add_annotation("range", -3, "7.5", smile.id)

        assert (a.start, a.end) == (0.0, 0.0)
        assert (b.start, b.end) == (0.0, 7.5)

    def test_ids_are_unique(self, store: AnnotationStore, smile) -> None:
        ids = {store.add_annotation("point", t, t, smile.id).id for t in range(20)}
        assert len(ids) == 20

    def test_label_may_disappear_later(self) -> None:
        """Annotations keep their own copy of the label data."""
        registry = LabelRegistry()
        label = registry.create_label("Temp", "#000000")
        store = AnnotationStore(registry, scheduler=lambda _d, _cb: None)
        a = store.add_annotation("point", 1.0, 1.0, label.id)

        registry._labels.clear()

        assert store.get(a.id).label_name == "Temp"


class TestDisplayOrder:
    """list_for_display sorts on read; storage keeps insertion order."""

    def test_sorted_by_start(self, store: AnnotationStore, smile) -> None:
        for t in (30.0, 5.0, 12.0, 0.5):
            store.add_annotation("point", t, t, smile.id)

        starts = [a.start for a in store.list_for_display()]

        assert starts == sorted(starts)
        assert [a.start for a in store.annotations()] == [30.0, 5.0, 12.0, 0.5]

    def test_ties_keep_insertion_order(self, store: AnnotationStore, registry: LabelRegistry) -> None:
        first = registry.create_label("First", "#e53935")
        second = registry.create_label("Second", "#43a047")
        third = registry.create_label("Third", "#1e88e5")
        store.add_annotation("point", 4.0, 4.0, first.id)
        store.add_annotation("point", 1.0, 1.0, third.id)
        store.add_annotation("point", 4.0, 4.0, second.id)

        names = [a.label_name for a in store.list_for_display()]

        assert names == ["Third", "First", "Second"]


class TestRemoveAnnotation:
    """Two-phase deletion: pending_removal, then purge after the delay."""

    def test_marks_pending_then_purges(self, store: AnnotationStore, smile, scheduler) -> None:
        a = store.add_annotation("point", 3.0, 3.0, smile.id)

        store.remove_annotation(a.id)

        assert store.is_pending_removal(a.id)
        assert store.count() == 1  # still counted until purged
        assert scheduler.calls[0][0] == 180

        scheduler.advance(179)
        assert store.count() == 1

        scheduler.advance(1)
        assert store.count() == 0
        assert a.id not in [x.id for x in store.list_for_display()]
        assert store.removal_state(a.id) is None

    def test_double_delete_purges_once(self, store: AnnotationStore, smile, scheduler) -> None:
        """A second request inside the window neither reschedules nor throws."""
        a = store.add_annotation("point", 3.0, 3.0, smile.id)
        keep = store.add_annotation("point", 4.0, 4.0, smile.id)
        changes = []
        store.annotations_changed.connect(lambda: changes.append(True))

        store.remove_annotation(a.id)
        scheduler.advance(100)
        store.remove_annotation(a.id)
        scheduler.advance(500)

        assert len(scheduler.calls) == 1
        assert len(changes) == 1
        assert [x.id for x in store.annotations()] == [keep.id]

    def test_concurrent_deletes_each_purge(self, store: AnnotationStore, smile, scheduler) -> None:
        """Deleting a second annotation does not cancel the first one's purge."""
        a = store.add_annotation("point", 1.0, 1.0, smile.id)
        b = store.add_annotation("point", 2.0, 2.0, smile.id)
        c = store.add_annotation("point", 3.0, 3.0, smile.id)

        store.remove_annotation(a.id)
        scheduler.advance(90)
        store.remove_annotation(b.id)

        assert set(store.pending_ids()) == {a.id, b.id}

        scheduler.advance(90)
        assert [x.id for x in store.annotations()] == [b.id, c.id]

        scheduler.advance(90)
        assert [x.id for x in store.annotations()] == [c.id]

    def test_unknown_id_is_ignored(self, store: AnnotationStore, scheduler) -> None:
        store.remove_annotation("missing")
        assert scheduler.calls == []

    def test_state_signals(self, store: AnnotationStore, smile, scheduler) -> None:
        a = store.add_annotation("point", 1.0, 1.0, smile.id)
        states = []
        store.removal_state_changed.connect(lambda aid, state: states.append((aid, state)))

        store.remove_annotation(a.id)
        scheduler.advance(180)

        assert states == [(a.id, "pending_removal"), (a.id, "purged")]

    def test_timer_after_clear_is_harmless(self, store: AnnotationStore, smile, scheduler) -> None:
        """A purge firing after the store was cleared does nothing."""
        a = store.add_annotation("point", 1.0, 1.0, smile.id)
        store.remove_annotation(a.id)
        store.clear()
        fresh = store.add_annotation("point", 1.0, 1.0, smile.id)

        scheduler.advance(180)

        assert [x.id for x in store.annotations()] == [fresh.id]

    def test_purge_drops_state_entry(self, store: AnnotationStore, smile, scheduler) -> None:
        """Removal state is only kept for annotations still in the store."""
        for t in range(50):
            a = store.add_annotation("point", t, t, smile.id)
            store.remove_annotation(a.id)
        scheduler.advance(180)

        assert store.count() == 0
        assert store._states == {}

    def test_committed_state_until_removed(self, store: AnnotationStore, smile) -> None:
        a = store.add_annotation("point", 1.0, 1.0, smile.id)
        assert store.removal_state(a.id) == RemovalState.COMMITTED
