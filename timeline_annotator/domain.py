# timeline_annotator/domain.py
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


# -----------------------------
# Labels / Colors
# -----------------------------

# 10 swatches offered by the Add Label dialog. Duplicates across labels are allowed.
LABEL_COLORS: Tuple[str, ...] = (
    "#e53935",  # red
    "#fb8c00",  # orange
    "#43a047",  # green
    "#1e88e5",  # blue
    "#8e24aa",  # purple
    "#d81b60",  # hot pink
    "#00897b",  # teal
    "#f4511e",  # deep orange
    "#00acc1",  # cyan
    "#5e35b1",  # deep purple
)

ANNOTATION_POINT = "point"
ANNOTATION_RANGE = "range"
ANNOTATION_TYPES: Tuple[str, ...] = (ANNOTATION_POINT, ANNOTATION_RANGE)

THEME_LIGHT = "light"
THEME_DARK = "dark"


class RemovalState(str, Enum):
    COMMITTED = "committed"
    PENDING_REMOVAL = "pending_removal"
    PURGED = "purged"


def new_id() -> str:
    return uuid.uuid4().hex


def coerce_seconds(value) -> float:
    """
    Coerce user/time input to seconds.

    Non-numeric, non-finite and negative values all become 0.0.
    """
    if value is None:
        return 0.0
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(v) or v < 0:
        return 0.0
    return v


def normalize_notes(notes: Optional[str]) -> Optional[str]:
    if notes is None:
        return None
    s = str(notes).strip()
    return s or None


def normalize_theme_mode(value: Optional[str]) -> str:
    if value in (THEME_LIGHT, THEME_DARK):
        return str(value)
    return THEME_LIGHT


# -----------------------------
# Core Dataclasses
# -----------------------------

@dataclass(frozen=True)
class Label:
    id: str
    name: str
    color: str


@dataclass(frozen=True)
class Annotation:
    """
    A single point or range on the video timeline.

    Times are seconds. label_name/label_color are a snapshot of the label
    taken when the annotation was created.
    """
    id: str
    type: str  # "point" | "range"
    start: float
    end: float
    label_id: str
    label_name: str
    label_color: str
    notes: Optional[str] = None

    @property
    def is_point(self) -> bool:
        return self.type == ANNOTATION_POINT

    @property
    def is_range(self) -> bool:
        return self.type == ANNOTATION_RANGE


@dataclass
class AnnotationDraft:
    """
    Form state behind the Add Annotation dialog.
    """
    type: str = ANNOTATION_POINT
    start: float = 0.0
    end: float = 0.0
    label_id: str = ""
    notes: str = ""

    def can_submit(self) -> bool:
        if not self.label_id:
            return False
        if self.type == ANNOTATION_RANGE and coerce_seconds(self.end) < coerce_seconds(self.start):
            return False
        return True


# -----------------------------
# App configuration
# -----------------------------

@dataclass(frozen=True)
class AppConfig:
    """
    Created once at startup (see settings.load_app_config) and passed down.
    """
    theme_mode: str = THEME_LIGHT
    removal_delay_ms: int = 180
    min_segment_percent: float = 1.0
    marker_separator: str = " – "
    csv_quote_fields: bool = True
    label_colors: Tuple[str, ...] = field(default=LABEL_COLORS)

    def to_dict(self) -> Dict:
        return {
            "theme_mode": self.theme_mode,
            "removal_delay_ms": int(self.removal_delay_ms),
            "min_segment_percent": float(self.min_segment_percent),
            "marker_separator": self.marker_separator,
            "csv_quote_fields": bool(self.csv_quote_fields),
            "label_colors": list(self.label_colors),
        }

