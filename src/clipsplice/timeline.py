"""Composite timeline math over an ordered list of segments.

Segments play back to back. Each one occupies a range of composite time:

    start_i = sum of effective durations of segments 0..i-1
    end_i   = start_i + effective duration of segment i

Ranges are always derived from the segment list, never stored.
"""

from dataclasses import dataclass, field

from .frames import clamp, to_seconds
from .segments import Segment, effective_duration


@dataclass(frozen=True)
class TimelineRange:
    start: float
    end: float
    duration: float
    segment: Segment


@dataclass(frozen=True)
class Timeline:
    ranges: list[TimelineRange] = field(default_factory=list)
    total: float = 0.0


@dataclass(frozen=True)
class SegmentLocation:
    """Where a composite time falls on the timeline.

    index is -1 and segment is None when the timeline is empty.
    """

    index: int
    segment: Segment | None
    local_time: float
    offset: float
    time: float
    total: float


NOT_FOUND = SegmentLocation(index=-1, segment=None, local_time=0.0, offset=0.0, time=0.0, total=0.0)


def compute_timeline(segments: list[Segment] | None) -> Timeline:
    """Build cumulative composite ranges and the total duration."""
    ranges = []
    total = 0.0
    for segment in segments or []:
        duration = effective_duration(segment)
        start = total
        total += duration
        ranges.append(TimelineRange(start=start, end=total, duration=duration, segment=segment))
    return Timeline(ranges=ranges, total=total)


def find_segment_at_time(segments: list[Segment] | None, time) -> SegmentLocation:
    """Resolve a composite time to the segment playing at that moment.

    The time is clamped into [0, total]. The first range whose end is
    >= the time wins, so a time sitting exactly on the boundary between
    two segments belongs to the earlier one (local_time equals its full
    duration). The last range catches everything else, which makes
    time == total resolve to the final segment.
    """
    timeline = compute_timeline(segments)
    if not timeline.ranges:
        return NOT_FOUND

    clamped = clamp(to_seconds(time), 0.0, timeline.total)
    for index, rng in enumerate(timeline.ranges):
        if clamped <= rng.end:
            break
    # Without an earlier match, index/rng are left on the last range.
    return SegmentLocation(
        index=index,
        segment=rng.segment,
        local_time=clamped - rng.start,
        offset=rng.start,
        time=clamped,
        total=timeline.total,
    )


def segment_offset(segments: list[Segment] | None, index: int) -> float:
    """Composite start time of the segment at index."""
    segments = segments or []
    return sum(effective_duration(seg) for seg in segments[:max(0, index)])
