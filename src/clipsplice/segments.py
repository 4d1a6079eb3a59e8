"""Segment record and trim math.

A segment is a trimmed view of a source clip: the clip's full duration
plus in/out trim points, all in source seconds.
"""

import math
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Segment:
    """A trimmed reference to a source clip.

    Attributes:
        id: Unique identifier, stable for the segment's lifetime.
        source: Opaque media handle (a file path for clips on disk).
        duration: Full clip length in seconds.
        in_point: Trim start offset in seconds.
        out_point: Trim end offset in seconds, or None for "to the end".
        label: Display name only.

    Raises:
        ValueError: Non-finite numbers, negative duration/in_point, or
            out_point before in_point.
    """

    id: str
    source: str
    duration: float
    in_point: float = 0.0
    out_point: float | None = None
    label: str = "Clip"

    def __post_init__(self):
        numbers = {"duration": self.duration, "in_point": self.in_point}
        if self.out_point is not None:
            numbers["out_point"] = self.out_point
        for name, value in numbers.items():
            if not math.isfinite(value):
                raise ValueError(f"Segment {self.id}: {name} must be finite, got {value!r}")
        if self.duration < 0:
            raise ValueError(f"Segment {self.id}: duration must be >= 0, got {self.duration}")
        if self.in_point < 0:
            raise ValueError(f"Segment {self.id}: in_point must be >= 0, got {self.in_point}")
        if self.out_point is not None and self.out_point < self.in_point:
            raise ValueError(
                f"Segment {self.id}: out_point ({self.out_point}) "
                f"must be >= in_point ({self.in_point})"
            )

    def trimmed(self, out_point: float) -> "Segment":
        """Return a copy ending at out_point (source seconds)."""
        return replace(self, out_point=out_point)


def effective_duration(segment: Segment | None) -> float:
    """Playable length of a segment in seconds, always >= 0.

    An out_point only counts when it lies after in_point; otherwise the
    segment plays from in_point to the end of the clip.
    """
    if segment is None:
        return 0.0
    start = segment.in_point
    end = segment.out_point
    if end is not None and end > start:
        return end - start
    return max(0.0, segment.duration - start)
