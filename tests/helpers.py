import subprocess
from pathlib import Path


class FakeFFmpeg:
    """Stands in for subprocess.run; optionally writes frames like ffmpeg would."""

    def __init__(self, frames=(), returncode=0, output="frame=    1 fps=0.0", error=None):
        self.frames = list(frames)
        self.returncode = returncode
        self.output = output
        self.error = error
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.error is not None:
            raise self.error
        for frame in self.frames:
            Path(frame).write_bytes(b"\xff\xd8\xff")
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=self.output)


class ExplodingInspector:
    """Fails the test if anything asks it for media info."""

    def duration(self):
        raise AssertionError("inspector should not be consulted")

    def fps(self):
        raise AssertionError("inspector should not be consulted")
