"""Export container resolution and capture audio policy.

The spliced timeline is exported by recording its playback. These
helpers pick the container/codec string for the recorder and the audio
settings for the player being recorded. Exports always land in a WebM
container, whatever codec string was requested.

Host support is checked against the ffmpeg binary bundled with
imageio-ffmpeg: the container needs a muxer and each requested codec an
encoder.
"""

import subprocess
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable

import imageio_ffmpeg

DEFAULT_EXPORT_TYPE = "video/webm"
EXPORT_EXTENSION = "webm"

# MIME base type -> ffmpeg muxer name.
CONTAINER_MUXERS = {
    "video/webm": "webm",
    "audio/webm": "webm",
}

# codecs= parameter value -> ffmpeg encoders, any one of which will do.
CODEC_ENCODERS = {
    "vp8": ("libvpx",),
    "vp9": ("libvpx-vp9",),
    "av1": ("libaom-av1", "libsvtav1", "librav1e"),
    "opus": ("libopus", "opus"),
    "vorbis": ("libvorbis", "vorbis"),
}


@dataclass(frozen=True)
class ExportFormat:
    mime_type: str
    base_type: str
    extension: str


@dataclass(frozen=True)
class CaptureAudioPolicy:
    """Audio settings for the player whose output is being captured.

    The audio track stays in the capture (not muted) while the monitored
    playback is silent (volume 0), so speakers can't feed back into it.
    """

    muted: bool = False
    volume: float = 0.0


def resolve_export_format(
    format_hint: str | None = None,
    is_supported: Callable[[str], bool] | None = None,
) -> ExportFormat:
    """Pick the recorder MIME type for an export.

    Args:
        format_hint: Requested MIME type, e.g. 'video/webm;codecs=vp9'.
            Empty or non-string values select the default.
        is_supported: Host capability check. When given and it rejects
            the requested type, the default container is used instead.
            When None, the request is taken as is.

    Returns:
        ExportFormat with the full MIME type, the type without
        parameters, and the file extension.
    """
    if isinstance(format_hint, str) and format_hint:
        mime_type = format_hint
    else:
        mime_type = DEFAULT_EXPORT_TYPE
    if is_supported is not None and not is_supported(mime_type):
        mime_type = DEFAULT_EXPORT_TYPE
    base_type = mime_type.split(";")[0].strip() or DEFAULT_EXPORT_TYPE
    return ExportFormat(mime_type=mime_type, base_type=base_type, extension=EXPORT_EXTENSION)


def resolve_capture_audio_policy() -> CaptureAudioPolicy:
    return CaptureAudioPolicy(muted=False, volume=0.0)


# ── Host capability (ffmpeg) ──────────────────────────────────────


def parse_mime_codecs(mime_type: str) -> tuple[str, list[str]]:
    """Split 'video/webm;codecs="vp9,opus"' into ('video/webm', ['vp9', 'opus'])."""
    base, *params = mime_type.split(";")
    codecs = []
    for param in params:
        key, _, value = param.partition("=")
        if key.strip().lower() != "codecs":
            continue
        value = value.strip().strip('"').strip("'")
        codecs.extend(c.strip().lower() for c in value.split(",") if c.strip())
    return base.strip().lower(), codecs


def supported_by_ffmpeg(mime_type: str, muxers: set[str], encoders: set[str]) -> bool:
    """Whether ffmpeg with the given muxers/encoders can produce mime_type."""
    base, codecs = parse_mime_codecs(mime_type)
    muxer = CONTAINER_MUXERS.get(base)
    if muxer is None or muxer not in muxers:
        return False
    for codec in codecs:
        # Strip profile suffixes such as 'vp09.00.10.08' -> 'vp09'.
        name = codec.split(".")[0]
        if name == "vp09":
            name = "vp9"
        candidates = CODEC_ENCODERS.get(name)
        if candidates is None or not any(enc in encoders for enc in candidates):
            return False
    return True


def _parse_ffmpeg_listing(output: str) -> set[str]:
    """Names from `ffmpeg -encoders` / `ffmpeg -muxers` output.

    Both listings print a legend, a ' ---' / ' --' separator line, then
    one entry per line: '<flags> <name> <description>'.
    """
    names = set()
    in_body = False
    for line in output.splitlines():
        stripped = line.strip()
        if not in_body:
            if stripped.startswith("--"):
                in_body = True
            continue
        parts = stripped.split()
        if len(parts) >= 2:
            names.add(parts[1])
    return names


@lru_cache(maxsize=None)
def _ffmpeg_capabilities() -> tuple[frozenset[str], frozenset[str]]:
    ffmpeg = imageio_ffmpeg.get_ffmpeg_exe()
    muxers = subprocess.run(
        [ffmpeg, "-hide_banner", "-muxers"],
        capture_output=True, text=True, check=True,
    ).stdout
    encoders = subprocess.run(
        [ffmpeg, "-hide_banner", "-encoders"],
        capture_output=True, text=True, check=True,
    ).stdout
    return frozenset(_parse_ffmpeg_listing(muxers)), frozenset(_parse_ffmpeg_listing(encoders))


def ffmpeg_supports(mime_type: str) -> bool:
    """Host capability check backed by the bundled ffmpeg binary."""
    muxers, encoders = _ffmpeg_capabilities()
    return supported_by_ffmpeg(mime_type, set(muxers), set(encoders))
