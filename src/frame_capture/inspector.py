"""
Media inspection: duration and frame rate of a video.

FrameCapturer only needs two numbers from the input, so anything with
duration() (milliseconds) and fps() can stand in for ffprobe.
"""

from __future__ import annotations

import json
import logging
import math
import subprocess
from pathlib import Path
from typing import Protocol

from .errors import MediaInspectionError
from .models import MediaInfo

logger = logging.getLogger(__name__)

DEFAULT_FFPROBE_BINARY = "ffprobe"


class MediaInspector(Protocol):
    def duration(self) -> int: ...

    def fps(self) -> float: ...


class StaticInspector:
    """Inspector for callers that already know the numbers."""

    def __init__(self, duration_ms: int, fps: float) -> None:
        self._info = MediaInfo(duration_ms=duration_ms, fps=fps)

    def duration(self) -> int:
        return self._info.duration_ms

    def fps(self) -> float:
        return self._info.fps


def _parse_rate(value: str | None) -> float | None:
    """Parse an ffprobe rate like '30000/1001' or '25'. Returns None for 0/0."""
    if not value:
        return None
    num, denom = value.split("/") if "/" in value else (value, "1")
    try:
        rate = float(num) / float(denom)
    except (ValueError, ZeroDivisionError):
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


class FFprobeInspector:
    """Reads duration and frame rate of a file with ffprobe (probed once, lazily)."""

    def __init__(self, path: Path | str, ffprobe_binary: str = DEFAULT_FFPROBE_BINARY):
        self.path = Path(path)
        self.ffprobe_binary = ffprobe_binary or DEFAULT_FFPROBE_BINARY
        self._info: MediaInfo | None = None

    def duration(self) -> int:
        return self.info().duration_ms

    def fps(self) -> float:
        return self.info().fps

    def info(self) -> MediaInfo:
        if self._info is None:
            self._info = self._probe()
        return self._info

    def _probe(self) -> MediaInfo:
        if not self.path.exists():
            raise MediaInspectionError(f"Video not found: {self.path}")

        cmd = [
            self.ffprobe_binary,
            "-v",
            "error",
            "-select_streams",
            "v:0",
            "-show_entries",
            "format=duration:stream=avg_frame_rate,r_frame_rate",
            "-of",
            "json",
            str(self.path),
        ]
        logger.debug("Inspecting media: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise MediaInspectionError(
                f"Could not run {self.ffprobe_binary}: {e}"
            ) from e

        if result.returncode != 0:
            raise MediaInspectionError(
                f"ffprobe failed on {self.path}:\n{result.stderr.strip()}"
            )
        return parse_probe_output(result.stdout, self.path)


def parse_probe_output(text: str, path: Path | str = "<input>") -> MediaInfo:
    """Turn ffprobe's JSON output into a MediaInfo."""
    try:
        data = json.loads(text or "{}")
    except json.JSONDecodeError as e:
        raise MediaInspectionError(f"Unreadable ffprobe output for {path}: {e}") from e

    raw_duration = (data.get("format") or {}).get("duration")
    try:
        seconds = float(raw_duration)
    except (TypeError, ValueError):
        raise MediaInspectionError(f"No duration reported for {path}") from None
    if not math.isfinite(seconds) or seconds < 0:
        raise MediaInspectionError(f"Invalid duration {raw_duration!r} for {path}")

    fps = None
    streams = data.get("streams") or []
    if streams:
        stream = streams[0]
        # avg_frame_rate is 0/0 for some containers; r_frame_rate is the fallback.
        fps = _parse_rate(stream.get("avg_frame_rate")) or _parse_rate(
            stream.get("r_frame_rate")
        )
    if fps is None:
        logger.warning("No frame rate reported for %s; frame offsets will fail", path)
        fps = 0.0

    return MediaInfo(duration_ms=int(seconds * 1000), fps=fps)
