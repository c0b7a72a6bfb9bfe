"""
Load capture defaults from settings.json.

Resolution order for each option: built-in default → nearest settings.json
above the input video ("capture" section) → environment → CLI flags.

Several settings.json files can sit on the way up (e.g. a project root and a
per-session folder). They are merged with the one closest to the video
winning, so a session can override just the keys it cares about:

  {
    "capture": {
      "ffmpeg_binary": "/opt/ffmpeg/bin/ffmpeg",
      "ffprobe_binary": "/opt/ffmpeg/bin/ffprobe",
      "interval": 5
    }
  }
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"
SETTINGS_SECTION = "capture"

# Environment variables that override settings.json
ENV_OVERRIDES = {
    "ffmpeg_binary": "FFMPEG_BINARY",
    "ffprobe_binary": "FFPROBE_BINARY",
}


def _settings_files(context_path: Path) -> list[Path]:
    """settings.json files from the filesystem root down to the video's folder."""
    try:
        resolved = context_path.resolve()
    except OSError:
        return []
    found = []
    p = resolved.parent
    while True:
        candidate = p / SETTINGS_FILENAME
        if candidate.is_file():
            found.append(candidate)
        if p == p.parent:
            break
        p = p.parent
    return list(reversed(found))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override values take precedence."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def load_settings(context_path: Path) -> dict[str, Any]:
    """
    Load the merged "capture" settings for a video.

    Args:
        context_path: The input video (or any path next to it).

    Returns:
        Capture options from every settings.json above context_path, merged
        closest-last, with environment overrides applied. Empty dict if none.
    """
    merged: dict[str, Any] = {}
    for settings_file in _settings_files(Path(context_path)):
        try:
            data = json.loads(settings_file.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.debug("Ignoring unreadable %s: %s", settings_file, e)
            continue
        section = data.get(SETTINGS_SECTION) if isinstance(data, dict) else None
        if isinstance(section, dict):
            merged = deep_merge(merged, section)

    for key, env_var in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            merged[key] = value
    return merged
