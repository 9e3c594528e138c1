# timeline_annotator/export.py
from __future__ import annotations

import csv
import io
import logging
import math
import os
import re
import tempfile
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional

from .domain import Annotation

logger = logging.getLogger(__name__)

CSV_HEADER = ["start", "end", "label", "description"]
CSV_MIME_TYPE = "text/csv"
DEFAULT_FILENAME_BASE = "annotations"


@dataclass(frozen=True)
class CsvExport:
    data: bytes
    filename: str
    mime_type: str = CSV_MIME_TYPE


# -----------------------------
# Field formatting
# -----------------------------

def format_seconds(value: float) -> str:
    """Plain decimal seconds: 5.0 -> "5", 12.5 -> "12.5", 1e-05 -> "0.00001"."""
    v = float(value)
    if math.isfinite(v) and v.is_integer():
        return str(int(v))
    text = repr(v)
    if math.isfinite(v) and "e" in text:
        # Same shortest digits, without the exponent.
        return format(Decimal(text), "f")
    return text


def _row_fields(a: Annotation) -> List[str]:
    return [
        format_seconds(a.start),
        format_seconds(a.end),
        a.label_name or "",
        a.notes or "",
    ]


def _quoted_line(fields: List[str]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(fields)
    return buf.getvalue()[:-1]


def annotations_to_csv(annotations: Iterable[Annotation], quote_fields: bool = True) -> str:
    """
    Header line, then one line per annotation in the order given (store order).

    quote_fields=False interpolates fields raw, so commas or newlines inside a
    label or note will break the row.
    """
    render = _quoted_line if quote_fields else ",".join
    rows = [render(_row_fields(a)) for a in annotations]
    return ",".join(CSV_HEADER) + "\n" + "\n".join(rows)


# -----------------------------
# Filenames
# -----------------------------

def csv_filename_for(video_name: Optional[str]) -> str:
    """
    "clip.final.mp4" -> "clip.final-annotations.csv"; missing name -> "annotations-annotations.csv".
    """
    base = ""
    if video_name:
        base = os.path.basename(str(video_name))
        base = re.sub(r"\.[^/.]+$", "", base)
    return f"{base or DEFAULT_FILENAME_BASE}-annotations.csv"


def export_csv(
    annotations: Iterable[Annotation],
    filename_base: Optional[str] = None,
    quote_fields: bool = True,
) -> CsvExport:
    annotations = list(annotations)
    text = annotations_to_csv(annotations, quote_fields=quote_fields)
    export = CsvExport(data=text.encode("utf-8"), filename=csv_filename_for(filename_base))
    logger.info("Exported %d annotation(s) as %s", len(annotations), export.filename)
    return export


# -----------------------------
# Atomic file helpers
# -----------------------------

def _atomic_write_bytes(path: str, data: bytes) -> None:
    d = os.path.dirname(path) or "."
    os.makedirs(d, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp_", dir=d)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


def write_csv_export(export: CsvExport, directory: str) -> str:
    """Writes <directory>/<export.filename> atomically. Returns the written path."""
    path = os.path.join(directory, export.filename)
    _atomic_write_bytes(path, export.data)
    return path


def write_csv_export_to(export: CsvExport, path: str) -> str:
    """Same as write_csv_export, for a path the user picked in a save dialog."""
    _atomic_write_bytes(path, export.data)
    return path
