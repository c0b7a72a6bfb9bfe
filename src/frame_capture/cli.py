#!/usr/bin/env python3
"""
Capture JPEG frames from a video.

Usage:
  extract-frames <video> [--offset <timecode>] [--interval <seconds>] [--output <path>]

Examples:
  extract-frames segment.mp4                      # frame at t=0 -> segment-0.jpg
  extract-frames segment.mp4 --offset 10%         # frame at 10% of the duration
  extract-frames segment.mp4 --offset 250f        # frame 250
  extract-frames segment.mp4 --interval 5         # segment-1.jpg, segment-2.jpg, ...
  extract-frames segment.mp4 -t 3.5 -o /tmp/check.jpg

Defaults for --interval, --offset and the binaries come from the nearest
settings.json ("capture" section) above the video, then FFMPEG_BINARY /
FFPROBE_BINARY.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .capturer import FrameCapturer
from .errors import CaptureError
from .inspector import FFprobeInspector
from .settings import load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extract-frames",
        description="Capture JPEG frames from a video with ffmpeg",
    )
    parser.add_argument("video", type=Path, help="Input video file")
    parser.add_argument(
        "--offset",
        "-t",
        default=None,
        help="Where to grab: seconds ('37' or '37s'), frames ('37f') or percent ('37%%')",
    )
    parser.add_argument(
        "--interval",
        "-n",
        type=float,
        default=None,
        help="Grab a frame every N seconds instead of a single frame",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Output path or pattern with %%d (default: next to the video)",
    )
    parser.add_argument("--ffmpeg-binary", default=None, help="ffmpeg executable")
    parser.add_argument("--ffprobe-binary", default=None, help="ffprobe executable")
    parser.add_argument(
        "--check-exit",
        action="store_true",
        help="Fail if ffmpeg is missing or exits non-zero",
    )
    parser.add_argument("--json", action="store_true", help="Print paths as a JSON list")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show ffmpeg output")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if not args.video.exists():
        print(f"Error: Video not found: {args.video}", file=sys.stderr)
        return 1

    settings = load_settings(args.video)
    options = {
        "input": str(args.video),
        "output": args.output,
        "offset": args.offset if args.offset is not None else settings.get("offset"),
        "interval": args.interval if args.interval is not None else settings.get("interval"),
        "ffmpeg_binary": args.ffmpeg_binary or settings.get("ffmpeg_binary"),
        # CaptureConfig coerces settings values like "false" to a real bool.
        "check_exit": True if args.check_exit else settings.get("check_exit") or False,
    }
    ffprobe_binary = args.ffprobe_binary or settings.get("ffprobe_binary")

    try:
        capturer = FrameCapturer(
            options, inspector=FFprobeInspector(args.video, ffprobe_binary=ffprobe_binary)
        )
        frames = capturer.capture()
    except CaptureError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not frames:
        print(f"Error: ffmpeg produced no frames for {capturer.output}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(frames, indent=2))
    else:
        for frame in frames:
            print(frame)
    return 0


if __name__ == "__main__":
    sys.exit(main())
