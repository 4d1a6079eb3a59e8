"""Frame index <-> seconds conversion.

Every function here is total: non-numeric, non-finite or negative input
is coerced to 0, and any fps that is not a positive finite number falls
back to DEFAULT_FPS.
"""

import math

DEFAULT_FPS = 30


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return min(max(value, low), high)


def to_seconds(value) -> float:
    """Coerce value to a finite float, 0.0 when that isn't possible."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def normalize_fps(value, fallback: float = DEFAULT_FPS) -> float:
    try:
        fps = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if math.isfinite(fps) and fps > 0:
        return fps
    return fallback


def frame_to_time(frame, fps) -> float:
    """Start time in seconds of a frame index.

    The frame index is floored and clamped to >= 0.
    """
    frame_index = max(0, math.floor(to_seconds(frame)))
    return frame_index / normalize_fps(fps)


def time_to_frame(time, fps) -> int:
    """Index of the frame showing at `time` seconds."""
    seconds = max(0.0, to_seconds(time))
    frames = seconds * normalize_fps(fps)
    # A product past float range counts as non-finite.
    if not math.isfinite(frames):
        return 0
    return math.floor(frames)
