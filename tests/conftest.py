"""Shared test fixtures for clipsplice tests."""

import subprocess

import pytest
import yaml
import imageio_ffmpeg

from clipsplice.ids import CounterIdSource

_FFMPEG = imageio_ffmpeg.get_ffmpeg_exe()


@pytest.fixture
def source_video(tmp_path):
    """Create a 5-second test video (320x240, 10fps) with audio using ffmpeg.

    Shared across test_media.py and the CLI tests.
    """
    out = tmp_path / "source.mp4"
    subprocess.run(
        [
            _FFMPEG, "-y",
            "-f", "lavfi", "-i", "color=c=blue:s=320x240:d=5:r=10",
            "-f", "lavfi", "-i", "anullsrc=r=44100:cl=mono",
            "-shortest",
            "-c:v", "libx264", "-crf", "28", "-pix_fmt", "yuv420p",
            "-c:a", "aac", "-b:a", "32k",
            str(out),
        ],
        check=True,
        capture_output=True,
    )
    return out


@pytest.fixture
def ids():
    """Deterministic id source: seg-1, bm-2, ..."""
    return CounterIdSource()


@pytest.fixture
def write_manifest(tmp_path):
    """Write a manifest dict to a YAML file under tmp_path, return its path."""
    def _write(content: dict, name: str = "splices.yaml") -> str:
        path = tmp_path / name
        with open(path, "w") as f:
            yaml.dump(content, f)
        return str(path)
    return _write
