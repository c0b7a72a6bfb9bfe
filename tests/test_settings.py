import json
from pathlib import Path

import pytest

from frame_capture.settings import deep_merge, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    monkeypatch.delenv("FFMPEG_BINARY", raising=False)
    monkeypatch.delenv("FFPROBE_BINARY", raising=False)


def test_no_settings(tmp_path: Path) -> None:
    assert load_settings(tmp_path / "clip.mp4") == {}


def test_closest_settings_win(tmp_path: Path) -> None:
    session = tmp_path / "videos" / "monday"
    session.mkdir(parents=True)
    (tmp_path / "settings.json").write_text(
        json.dumps({"capture": {"ffmpeg_binary": "/opt/ffmpeg", "interval": 10}, "title": {"x": 1}})
    )
    (session / "settings.json").write_text(json.dumps({"capture": {"interval": 2}}))

    settings = load_settings(session / "clip.mp4")

    assert settings["interval"] == 2
    assert settings["ffmpeg_binary"] == "/opt/ffmpeg"
    assert "x" not in settings


def test_unreadable_settings_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "settings.json").write_text("{not json")
    assert load_settings(tmp_path / "clip.mp4") == {}


def test_environment_overrides_settings(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "settings.json").write_text(json.dumps({"capture": {"ffmpeg_binary": "/opt/ffmpeg"}}))
    monkeypatch.setenv("FFMPEG_BINARY", "/usr/bin/ffmpeg")
    monkeypatch.setenv("FFPROBE_BINARY", "/usr/bin/ffprobe")

    settings = load_settings(tmp_path / "clip.mp4")

    assert settings["ffmpeg_binary"] == "/usr/bin/ffmpeg"
    assert settings["ffprobe_binary"] == "/usr/bin/ffprobe"


def test_deep_merge() -> None:
    base = {"a": {"b": 1, "c": 2}, "d": 1}
    assert deep_merge(base, {"a": {"c": 3}}) == {"a": {"b": 1, "c": 3}, "d": 1}
    assert base == {"a": {"b": 1, "c": 2}, "d": 1}
