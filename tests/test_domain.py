"""Tests for domain helpers and dataclasses."""

import math

import pytest

from timeline_annotator.domain import (
    LABEL_COLORS,
    AnnotationDraft,
    AppConfig,
    coerce_seconds,
    normalize_notes,
    normalize_theme_mode,
)


class TestCoerceSeconds:
    @pytest.mark.parametrize(
        "value,expected",
        [(3, 3.0), ("2.5", 2.5), (None, 0.0), ("abc", 0.0), (-1, 0.0), (math.inf, 0.0), (math.nan, 0.0)],
    )
    def test_values(self, value, expected) -> None:
        assert coerce_seconds(value) == expected


class TestNormalizers:
    def test_notes(self) -> None:
        assert normalize_notes(None) is None
        assert normalize_notes("  ") is None
        assert normalize_notes(" hi ") == "hi"

    def test_theme_mode(self) -> None:
        assert normalize_theme_mode("dark") == "dark"
        assert normalize_theme_mode("purple") == "light"
        assert normalize_theme_mode(None) == "light"


class TestAnnotationDraft:
    """Add button enablement."""

    def test_needs_label(self) -> None:
        assert not AnnotationDraft().can_submit()
        assert AnnotationDraft(label_id="l1").can_submit()

    def test_inverted_range(self) -> None:
        assert not AnnotationDraft(type="range", start=10, end=5, label_id="l1").can_submit()
        assert AnnotationDraft(type="range", start=5, end=5, label_id="l1").can_submit()

    def test_point_ignores_end(self) -> None:
        assert AnnotationDraft(type="point", start=10, end=5, label_id="l1").can_submit()


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()
        assert cfg.removal_delay_ms == 180
        assert cfg.min_segment_percent == 1.0
        assert cfg.csv_quote_fields is True
        assert cfg.label_colors == LABEL_COLORS
        assert len(LABEL_COLORS) == 10

    def test_to_dict(self) -> None:
        d = AppConfig(theme_mode="dark").to_dict()
        assert d["theme_mode"] == "dark"
        assert d["label_colors"] == list(LABEL_COLORS)
