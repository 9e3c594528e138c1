# timeline_annotator/__init__.py
'''
timeline_annotator/
    __init__.py
    __main__.py            # `python -m timeline_annotator [video] [--debug]`

    app.py                 # QApplication + logging + theme boot
    main_window.py         # QMainWindow layout + wiring

    domain.py              # dataclasses: Label, Annotation, AnnotationDraft, AppConfig
    labels.py              # LabelRegistry (ordered, create-only)
    annotations.py         # AnnotationStore + two-phase deletion
    timeutils.py           # m:ss formatting, time <-> percent, segment layout
    timeline.py            # TimelineController: mirrors player clock, click-to-seek
    markers.py             # Marker + MarkerSyncAdapter (store -> overlay)
    export.py              # CSV export + atomic writes
    player.py              # PlayerControl / MarkerOverlay interfaces
    qt_player.py           # QMediaPlayer-backed PlayerControl
    session.py             # AnnotationSession: engine + player/overlay lifecycle
    settings.py            # AppConfig loading, theme preference (QSettings)
    theme.py               # light/dark palettes
    media.py               # local video validation

    widgets/
      marker_slider.py       # progress slider with marker ticks + SliderMarkerOverlay
      annotation_timeline.py # segment track with playhead + click-to-seek
      labels_panel.py        # labels list + add label / add annotation buttons
      annotations_list.py    # sorted annotations + delete + export

    dialogs/
      add_label.py         # name + palette swatches
      add_annotation.py    # start/end, point/range, label, notes
'''

from __future__ import annotations

__all__ = ["__version__", "run_app"]

__version__ = "0.1.0"


def run_app(*args, **kwargs) -> int:
    # Imported on call so the engine modules stay importable without QtWidgets/QtMultimedia.
    from .app import run_app as _run_app
    return _run_app(*args, **kwargs)
