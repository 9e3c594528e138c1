# timeline_annotator/__main__.py
from __future__ import annotations

import argparse
from typing import List, Optional

from .app import run_app


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="timeline-annotator", description="Annotate a local video and export CSV.")
    parser.add_argument("video", nargs="?", help="video file to open on startup")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    args = parser.parse_args(argv)
    return run_app(video_path=args.video, debug=args.debug)


if __name__ == "__main__":
    raise SystemExit(main())
