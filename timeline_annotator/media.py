# timeline_annotator/media.py
from __future__ import annotations

import mimetypes
import os
from typing import Optional, Tuple


ACCEPTED_VIDEO_MIME_TYPES = {
    "video/mp4",
    "video/webm",
    "video/ogg",
    "video/quicktime",  # .mov
    "video/x-msvideo",  # .avi
}

# Allowed local extensions (strict). mkv/m4v are playable by the Qt backends too.
ALLOWED_VIDEO_EXTS = {
    ".mp4", ".webm", ".ogg", ".mov", ".avi", ".mkv", ".m4v",
}

APP_TITLE = "Video Annotator"

VIDEO_FILE_FILTER = "Videos (*.mp4 *.webm *.ogg *.mov *.avi *.mkv *.m4v);;All files (*)"


def ext_lower(path: str) -> str:
    base = path.strip().split("?")[0].split("#")[0]
    _, ext = os.path.splitext(base)
    return ext.lower().strip()


def guess_video_mime_type(path: str) -> Optional[str]:
    mime, _ = mimetypes.guess_type(path)
    return mime


def is_video_file(path: str) -> bool:
    if not path:
        return False
    if guess_video_mime_type(path) in ACCEPTED_VIDEO_MIME_TYPES:
        return True
    return ext_lower(path) in ALLOWED_VIDEO_EXTS


def validate_local_video_path(path: str) -> Tuple[bool, str]:
    if not path:
        return (False, "No file selected.")
    if not os.path.exists(path):
        return (False, f"File does not exist: {path}")
    if not os.path.isfile(path):
        return (False, f"Not a file: {path}")
    if not is_video_file(path):
        return (False, "Please choose a video file (e.g. MP4, WebM, OGG, MOV, AVI).")
    return (True, "OK")


def video_display_name(path: Optional[str]) -> str:
    if not path:
        return ""
    return os.path.basename(path)


def window_title(path: Optional[str]) -> str:
    name = video_display_name(path)
    return f"{APP_TITLE} - {name}" if name else APP_TITLE
