"""Errors raised while configuring, resolving, or running a frame capture."""


class CaptureError(Exception):
    """Base class for frame capture failures."""


class ConfigError(CaptureError):
    """Required configuration is missing or invalid (e.g. no input path)."""


class ParameterError(CaptureError):
    """A timecode could not be parsed or converted to seconds."""


class MediaInspectionError(CaptureError):
    """Duration or frame rate could not be read from the input."""


class ExecutionError(CaptureError):
    """ffmpeg failed to run or exited non-zero (only raised with check_exit)."""

    def __init__(self, message: str, returncode: int | None = None, output: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.output = output
