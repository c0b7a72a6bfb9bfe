"""
Capture JPEG frames from a video with ffmpeg.

You can capture one or many frames:

  - one frame at a given offset
  - frames every n seconds from a given offset

Offsets are timecodes: '37%', '37s' (or just '37') and '37f'. Anything past
the end of the video becomes the 99% mark.

  capture_frames({"input": "path/to/input.mp4", "offset": "10%"})
  # -> ['/path/to/input-2.0.jpg']     (for a 20s video)

With an interval you generally get a few more images than you might expect:
one for the very start, one for the very end, and maybe one or two more
depending on how close the duration is to a whole number of seconds.

  # input.mp4 is 19.6 seconds long
  capture_frames({"input": "path/to/input.mp4", "interval": 5})
  # -> ['/path/to/input-1.jpg', ..., '/path/to/input-6.jpg']

For more precision, run several single-frame captures at increasing offsets.
"""

from __future__ import annotations

import glob
import logging
import math
import os
import re
import subprocess
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from .command import build_ffmpeg_command, command_line
from .errors import ExecutionError, MediaInspectionError
from .inspector import FFprobeInspector, MediaInspector
from .models import CaptureConfig, MediaInfo, ResolvedCapture
from .timecode import resolve_offset

# printf-style integer directives ffmpeg expands into 1, 2, 3, ..., and the
# %% escape it writes as a literal %.
PATTERN_TOKEN = re.compile(r"%%|%0?\d*d")
DEFAULT_INDEX_PLACEHOLDER = "%d"

Logger = logging.Logger | logging.LoggerAdapter
Runner = Callable[..., subprocess.CompletedProcess]


def resolve_output(config: CaptureConfig, offset: int | float) -> str:
    """Output path or pattern for a capture.

    An explicit output is used verbatim. Otherwise the image goes next to the
    input as <stem>-%d.jpg (interval) or <stem>-<offset>.jpg (single frame).
    """
    if config.output:
        return config.output

    path = os.path.dirname(os.path.abspath(os.path.expanduser(config.input)))
    name = os.path.splitext(os.path.basename(config.input))[0]
    if config.interval:
        name += f"-{DEFAULT_INDEX_PLACEHOLDER}"
    else:
        name += f"-{offset}"
    return os.path.join(path, name + ".jpg")


def resolve_rate(config: CaptureConfig) -> int | float:
    """Frames per second to capture; 1 means a single shot."""
    return 1 / config.interval if config.interval else 1


def output_glob(output: str) -> str:
    """Glob pattern matching every file ffmpeg may write for an output pattern."""
    path = os.path.abspath(os.path.expanduser(output))
    parts = []
    pos = 0
    for m in PATTERN_TOKEN.finditer(path):
        parts.append(glob.escape(path[pos : m.start()]))
        parts.append("%" if m.group() == "%%" else "*")
        pos = m.end()
    parts.append(glob.escape(path[pos:]))
    return "".join(parts)


class FrameCapturer:
    """One frame capture request: resolved on construction, run by capture()."""

    def __init__(
        self,
        options: CaptureConfig | dict[str, Any],
        inspector: MediaInspector | None = None,
        logger: Logger | None = None,
        runner: Runner | None = None,
        ffprobe_binary: str | None = None,
    ) -> None:
        self.config = CaptureConfig.from_options(options)
        self.logger = logger or logging.getLogger(__name__)
        self._run = runner or subprocess.run

        self.inspector = inspector or FFprobeInspector(
            self.config.input, ffprobe_binary=ffprobe_binary
        )
        self.media = self._read_media()

        self.resolved = self._resolve()

    @classmethod
    def capture_frames(cls, options: CaptureConfig | dict[str, Any], **kwargs: Any) -> list[str]:
        return cls(options, **kwargs).capture()

    @property
    def input(self) -> str:
        return self.config.input

    @property
    def output(self) -> str:
        return self.resolved.output

    @property
    def offset(self) -> int | float:
        return self.resolved.offset

    @property
    def rate(self) -> int | float:
        return self.resolved.rate

    @property
    def limit(self) -> int | None:
        return self.resolved.limit

    @property
    def command(self) -> list[str]:
        return self.resolved.command

    def resolve_offset(self, timecode: str | int | float) -> float:
        """Seconds from the start of the input for a timecode."""
        return resolve_offset(timecode, self.media)

    def capture(self) -> list[str]:
        """Run ffmpeg and return the image files matching the output pattern.

        Files come back in filesystem order, which is not necessarily frame
        order. Unless check_exit is set, a failed ffmpeg run is not an error:
        whatever matches the pattern afterwards is returned, possibly nothing.
        """
        self.logger.info("Creating screenshot: %s", command_line(self.command))
        returncode, output = self._execute()
        self.logger.info("Screenshot results: %s", output)

        if self.config.check_exit and returncode != 0:
            raise ExecutionError(
                f"ffmpeg exited with status {returncode}", returncode=returncode, output=output
            )

        return glob.glob(output_glob(self.output))

    def _read_media(self) -> MediaInfo:
        duration = self.inspector.duration()
        fps = self.inspector.fps()
        try:
            rate = float(fps) if fps is not None else 0.0
            # Unknown frame rate only matters for frame timecodes.
            if not math.isfinite(rate):
                rate = 0.0
            return MediaInfo(duration_ms=int(duration), fps=rate)
        except (TypeError, ValueError, ValidationError) as e:
            raise MediaInspectionError(
                f"Invalid media info for {self.config.input}: duration={duration!r}, fps={fps!r}"
            ) from e

    def _resolve(self) -> ResolvedCapture:
        offset = self.resolve_offset(self.config.offset) if self.config.offset is not None else 0
        output = resolve_output(self.config, offset)
        # TODO: apply config.limit once "n frames evenly distributed" exists.
        return ResolvedCapture(
            offset=offset,
            rate=resolve_rate(self.config),
            limit=None,
            output=output,
            command=build_ffmpeg_command(
                self.config.input,
                output,
                offset,
                ffmpeg_binary=self.config.ffmpeg_binary,
            ),
        )

    def _execute(self) -> tuple[int | None, str]:
        try:
            result = self._run(
                self.command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except OSError as e:
            if self.config.check_exit:
                raise ExecutionError(f"Could not run {self.command[0]}: {e}") from e
            self.logger.warning("Could not run %s: %s", self.command[0], e)
            return None, str(e)
        return result.returncode, result.stdout or ""


def capture_frames(options: CaptureConfig | dict[str, Any], **kwargs: Any) -> list[str]:
    """Capture frames for an option map; see FrameCapturer for keyword arguments."""
    return FrameCapturer.capture_frames(options, **kwargs)
