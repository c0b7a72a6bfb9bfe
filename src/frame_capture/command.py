"""ffmpeg argument vector for grabbing JPEG frames."""

from __future__ import annotations

import shlex


def build_ffmpeg_command(
    input_file: str,
    output_file: str,
    offset: int | float,
    ffmpeg_binary: str = "ffmpeg",
    resolution: str | None = None,
) -> list[str]:
    """Build the ffmpeg call for a frame grab.

    Args:
        input_file: Video to read.
        output_file: Image path or pattern (e.g. 'clip-%d.jpg').
        offset: Seconds from the start, rendered as-is.
        ffmpeg_binary: Executable name or path.
        resolution: Optional 'WxH' for the output size.

    Returns:
        The argument list, in the order ffmpeg expects it.
    """
    cmd = [
        ffmpeg_binary,
        "-i",
        str(input_file),
        # Keep -ss after -i. Moving it ahead of -i makes grabs faster, but
        # some older MPEG-1/2 files then come out as an all-gray frame.
        "-ss",
        str(offset),
        "-vframes",
        "1",
        "-vcodec",
        "mjpeg",
        "-y",
        "-f",
        "image2",
    ]
    if resolution:
        cmd.extend(["-s", resolution])
    cmd.append(str(output_file))
    return cmd


def command_line(cmd: list[str]) -> str:
    """Render an argument list as a copy-pasteable shell line."""
    return shlex.join(cmd)
