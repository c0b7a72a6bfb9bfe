"""
Timecode parsing for frame capture offsets.

Three kinds of values are accepted:
  - seconds     e.g. '37s' or simply '37'
  - frames      e.g. '37f'  (divided by the frame rate)
  - percentage  e.g. '37%'  (of the total duration)

Anything past the end of the video collapses to the 99% mark.
"""

from __future__ import annotations

import math
import re

from .errors import ParameterError
from .models import MediaInfo

VALID_TIMECODE_FORMAT = re.compile(r"\A([0-9.]*)(s|f|%)?\Z")

CLAMP_TIMECODE = "99%"

_GRAMMAR_HINT = "Must be a number, optionally followed by s, f, or %."


def _invalid(timecode: object) -> ParameterError:
    return ParameterError(f"Invalid timecode for frame capture: {timecode}. {_GRAMMAR_HINT}")


def parse_timecode(timecode: str | int | float) -> tuple[float, str | None]:
    """Split a timecode into (number, unit). Unit is None when omitted."""
    m = VALID_TIMECODE_FORMAT.match(str(timecode))
    if m is None or not m.group(1):
        raise _invalid(timecode)
    try:
        number = float(m.group(1))
    except ValueError:
        # e.g. '1.2.3' or '.'
        raise _invalid(timecode) from None
    return number, m.group(2)


def resolve_offset(timecode: str | int | float, media: MediaInfo) -> float:
    """Convert a timecode to seconds from the start of the video."""
    number, unit = parse_timecode(timecode)

    if unit in ("s", None):
        seconds = number
    elif unit == "f":
        if not media.fps or not math.isfinite(media.fps):
            raise ParameterError(
                f"Cannot convert {timecode} to seconds: frame rate is unknown"
            )
        seconds = number / media.fps
    elif unit == "%":
        # milliseconds / 1000 * percent / 100
        seconds = (int(media.duration_ms) / 1000.0) * (number / 100.0)
    else:
        raise _invalid(timecode)

    if not math.isfinite(seconds):
        raise _invalid(timecode)

    if seconds * 1000 > media.duration_ms:
        return resolve_offset(CLAMP_TIMECODE, media)
    return seconds
