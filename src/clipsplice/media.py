"""Media adapters — probe clips, build segments, grab preview frames.

Uses moviepy for decoding and Pillow for image encoding. Seeking is
whatever moviepy/ffmpeg gives: frame grabs are not guaranteed to be
frame-accurate inside compressed streams.
"""

import base64
import io
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from moviepy import VideoFileClip
from PIL import Image

from .frames import clamp, to_seconds
from .ids import DEFAULT_ID_SOURCE, IdSource
from .segments import Segment


@dataclass(frozen=True)
class ClipMetadata:
    duration: float
    width: int
    height: int
    fps: float


def probe_clip(path: str | Path) -> ClipMetadata:
    """Read duration, frame size and fps of a video file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Clip not found: {path}")
    with VideoFileClip(str(path), audio=False) as clip:
        width, height = clip.size
        return ClipMetadata(
            duration=float(clip.duration or 0.0),
            width=int(width),
            height=int(height),
            fps=float(clip.fps or 0.0),
        )


def segment_from_file(
    path: str | Path,
    metadata: ClipMetadata | None = None,
    id_source: IdSource | None = None,
    label: str | None = None,
    segment_id: str | None = None,
) -> Segment:
    """Build an untrimmed segment covering the whole clip at path.

    Probes the file when metadata isn't supplied. A fresh id is drawn
    from id_source unless segment_id is given.
    """
    if metadata is None:
        metadata = probe_clip(path)
    ids = id_source or DEFAULT_ID_SOURCE
    return Segment(
        id=segment_id or ids.next_id("seg"),
        source=str(path),
        duration=metadata.duration,
        in_point=0.0,
        out_point=metadata.duration,
        label=label or Path(path).name or "Clip",
    )


def grab_frame(path: str | Path, time) -> Image.Image:
    """Decode the frame shown at `time` source seconds.

    The time is clamped so the last frame is returned for times at or
    past the end of the clip.
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Clip not found: {path}")
    with VideoFileClip(str(path), audio=False) as clip:
        fps = clip.fps or 30
        last = max(0.0, clip.duration - 1.0 / fps)
        frame = clip.get_frame(clamp(to_seconds(time), 0.0, last))
    return Image.fromarray(np.asarray(frame, dtype=np.uint8))


def frame_to_data_url(image: Image.Image) -> str:
    """Encode an image as a PNG data URL (the bookmark preview format)."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def save_frame(image: Image.Image, output: str | Path) -> Path:
    out = Path(output)
    out.parent.mkdir(parents=True, exist_ok=True)
    image.save(out, format="PNG")
    return out
