from pathlib import Path

import pytest

from frame_capture.inspector import StaticInspector


@pytest.fixture
def video(tmp_path: Path) -> Path:
    path = tmp_path / "input.mp4"
    path.write_bytes(b"fake")
    return path


@pytest.fixture
def inspector() -> StaticInspector:
    # 20 second clip at 25 fps
    return StaticInspector(duration_ms=20000, fps=25.0)
