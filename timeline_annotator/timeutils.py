# timeline_annotator/timeutils.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List

from .domain import Annotation


# -----------------------------
# Time formatting
# -----------------------------

def format_time(seconds: float) -> str:
    """Seconds -> "m:ss". Non-finite or negative input renders as 0:00."""
    try:
        sec = float(seconds)
    except (TypeError, ValueError):
        return "0:00"
    if not math.isfinite(sec) or sec < 0:
        return "0:00"
    m = int(sec // 60)
    s = int(sec % 60)
    return f"{m}:{s:02d}"


def format_span(annotation: Annotation) -> str:
    if annotation.is_range:
        return f"{format_time(annotation.start)}–{format_time(annotation.end)}"
    return format_time(annotation.start)


# -----------------------------
# Time <-> timeline coordinates
# -----------------------------

def _valid_duration(duration: float) -> bool:
    try:
        d = float(duration)
    except (TypeError, ValueError):
        return False
    return math.isfinite(d) and d > 0


def time_to_percent(time: float, duration: float) -> float:
    """Horizontal position of `time` on a track spanning [0, duration], in 0..100."""
    if not _valid_duration(duration):
        return 0.0
    pct = (float(time) / float(duration)) * 100.0
    if not math.isfinite(pct):
        return 0.0
    return max(0.0, min(pct, 100.0))


def segment_width_percent(annotation: Annotation, duration: float, min_percent: float = 1.0) -> float:
    """
    Ranges are proportional to their length; points get min_percent.
    Everything is floored to min_percent so it stays visible and clickable.
    """
    if annotation.is_point or not _valid_duration(duration):
        return float(min_percent)
    width = ((float(annotation.end) - float(annotation.start)) / float(duration)) * 100.0
    return max(width, float(min_percent))


def percent_to_time(position_px: float, track_width_px: float, duration: float) -> float:
    """
    Pointer x within the track -> seconds. The fraction is clamped to [0, 1]
    since pointer coordinates can land slightly outside the track.
    """
    if not _valid_duration(duration):
        return 0.0
    try:
        width = float(track_width_px)
    except (TypeError, ValueError):
        return 0.0
    if width <= 0:
        return 0.0
    frac = max(0.0, min(float(position_px) / width, 1.0))
    return frac * float(duration)


# -----------------------------
# Segment layout for the timeline track
# -----------------------------

@dataclass(frozen=True)
class SegmentLayout:
    annotation_id: str
    left_percent: float
    width_percent: float
    color: str
    title: str
    pending: bool = False


def segment_title(annotation: Annotation, separator: str = " – ") -> str:
    if annotation.notes:
        return f"{annotation.label_name}{separator}{annotation.notes}"
    return annotation.label_name


def layout_segments(
    annotations: Iterable[Annotation],
    duration: float,
    pending_ids: Iterable[str] = (),
    min_percent: float = 1.0,
    separator: str = " – ",
) -> List[SegmentLayout]:
    """Nothing is laid out until the player reports a duration."""
    if not _valid_duration(duration):
        return []
    pending = set(pending_ids or ())
    out: List[SegmentLayout] = []
    for a in annotations:
        out.append(
            SegmentLayout(
                annotation_id=a.id,
                left_percent=time_to_percent(a.start, duration),
                width_percent=segment_width_percent(a, duration, min_percent),
                color=a.label_color,
                title=segment_title(a, separator),
                pending=a.id in pending,
            )
        )
    return out
