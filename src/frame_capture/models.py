"""Data models for a single frame capture request."""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

DEFAULT_FFMPEG_BINARY = "ffmpeg"


class CaptureConfig(BaseModel):
    """Options for one capture: where to read, where to write, and when."""

    model_config = ConfigDict(extra="ignore")

    input: str = Field(description="Path to the input video")
    output: str | None = Field(
        default=None,
        description="Output path or pattern; may contain an index placeholder like %d",
    )
    offset: str | None = Field(
        default=None,
        description="Timecode to grab at: '37', '37s', '37f' or '37%'",
    )
    interval: float | None = Field(
        default=None, gt=0, description="Seconds between successive captures"
    )
    # Accepted for compatibility with older option maps; never applied.
    limit: int | None = Field(default=None, gt=0)
    ffmpeg_binary: str = Field(default=DEFAULT_FFMPEG_BINARY)
    check_exit: bool = Field(
        default=False,
        description="Raise ExecutionError when ffmpeg is missing or exits non-zero",
    )

    @field_validator("input", mode="before")
    @classmethod
    def _input_present(cls, v: Any) -> str:
        if v is None:
            raise ValueError("need input => /path/to/movie")
        if isinstance(v, Path):
            v = os.fspath(v)
        if not isinstance(v, str) or not v.strip():
            raise ValueError("need input => /path/to/movie")
        return v

    @field_validator("output", mode="before")
    @classmethod
    def _output_as_str(cls, v: Any) -> Any:
        if isinstance(v, Path):
            return os.fspath(v)
        if v == "":
            return None
        return v

    @field_validator("offset", mode="before")
    @classmethod
    def _offset_as_str(cls, v: Any) -> Any:
        # Numeric offsets are seconds, same as a bare number in a timecode.
        # Written out in full since timecodes have no exponent syntax.
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return format(Decimal(repr(v)), "f")
        return v

    @field_validator("ffmpeg_binary", mode="before")
    @classmethod
    def _binary_default(cls, v: Any) -> Any:
        return v or DEFAULT_FFMPEG_BINARY

    @classmethod
    def from_options(cls, options: CaptureConfig | dict[str, Any]) -> CaptureConfig:
        """Build a config from a model or a plain option map, raising ConfigError."""
        if isinstance(options, cls):
            return options
        if not isinstance(options, dict):
            raise ConfigError(f"Unsupported capture options: {options!r}")
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise ConfigError(_describe(e)) from e


class MediaInfo(BaseModel):
    """Duration and frame rate of the input, as reported by an inspector."""

    model_config = ConfigDict(frozen=True)

    duration_ms: int = Field(ge=0)
    fps: float = Field(ge=0)


class ResolvedCapture(BaseModel):
    """Everything needed to run ffmpeg, computed from a CaptureConfig."""

    # 0 stays an int when no offset was requested so it renders as "0".
    offset: int | float
    rate: int | float
    limit: int | None = None
    output: str
    command: list[str]


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "config"
        parts.append(f"{loc}: {item.get('msg', 'invalid value')}")
    return "Invalid capture options: " + "; ".join(parts)
