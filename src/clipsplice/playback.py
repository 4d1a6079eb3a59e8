"""Mapping between composite time and source-clip time for a player.

A player shows one segment's source clip at a time. Seeking converts a
composite time into (segment, source time); the player's position
reports convert back the other way. Playback moves to the next segment
once the source time gets within END_TOLERANCE of the segment's end.
"""

from dataclasses import dataclass

from .frames import clamp, to_seconds
from .segments import Segment
from .timeline import find_segment_at_time, segment_offset

END_TOLERANCE = 0.02


@dataclass(frozen=True)
class SeekTarget:
    index: int
    segment: Segment | None
    source_time: float


def source_span(segment: Segment) -> tuple[float, float]:
    """(start, end) of the segment in source-clip seconds."""
    out = segment.out_point
    # Same rule as effective_duration: an out_point only counts past in_point.
    end = out if out is not None and out > segment.in_point else segment.duration
    return segment.in_point, end


def seek_target(segments: list[Segment] | None, time) -> SeekTarget:
    """Segment and source time to load for a composite seek."""
    location = find_segment_at_time(segments, time)
    if location.segment is None:
        return SeekTarget(index=-1, segment=None, source_time=0.0)
    start, end = source_span(location.segment)
    return SeekTarget(
        index=location.index,
        segment=location.segment,
        source_time=clamp(start + location.local_time, 0.0, end),
    )


def composite_time(segments: list[Segment] | None, index: int, source_time) -> float:
    """Composite time for a player at source_time inside segment index."""
    segments = segments or []
    if not 0 <= index < len(segments):
        return 0.0
    local = max(0.0, to_seconds(source_time) - segments[index].in_point)
    return segment_offset(segments, index) + local


def should_advance(segment: Segment, source_time, tolerance: float = END_TOLERANCE) -> bool:
    """True once playback of segment has reached its end."""
    _, end = source_span(segment)
    return to_seconds(source_time) >= end - tolerance
