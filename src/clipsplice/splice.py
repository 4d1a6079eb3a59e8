"""Splice engine — rebuild a segment list around a cut point.

A splice keeps everything before the cut and replaces everything after
it with a single new segment. Three outcomes depending on where the cut
lands in composite time:

  - replace-all: cut at (or before) 0. The new segment is the whole
    timeline.
  - append: cut at the very end. Existing segments are kept untouched and
    the new segment follows them.
  - replace-tail: anything in between. Segments before the located one
    are kept, the located one is trimmed to end at the cut, and the new
    segment follows. Segments after the cut are dropped.

Inputs are never mutated; every call returns a new list.
"""

from dataclasses import replace

from .frames import clamp, to_seconds
from .segments import Segment
from .timeline import compute_timeline, find_segment_at_time


def splice_segments(
    segments: list[Segment] | None,
    cut_time,
    new_segment: Segment | None = None,
) -> list[Segment]:
    """Replace everything after cut_time with new_segment.

    Args:
        segments: Current timeline, in playback order.
        cut_time: Composite seconds. Clamped into [0, total].
        new_segment: Replacement clip. When None the timeline is
            returned unchanged (as a copy).

    Returns:
        New ordered list of segments.
    """
    current = list(segments or [])
    if not current:
        return [new_segment] if new_segment is not None else []
    if new_segment is None:
        return current

    total = compute_timeline(current).total
    cut = clamp(to_seconds(cut_time), 0.0, total)
    if cut <= 0:
        return [new_segment]

    location = find_segment_at_time(current, cut)
    index = location.index

    # Cut at the end of the last segment: plain append.
    if index == len(current) - 1 and cut >= total:
        return current + [new_segment]

    kept = [replace(seg) for seg in current[:index]]

    # A cut exactly at the located segment's start leaves a zero-length
    # remnant, which is dropped.
    if location.local_time > 0:
        segment = location.segment
        kept.append(segment.trimmed(segment.in_point + location.local_time))

    kept.append(new_segment)
    return kept


def removed_segments(before: list[Segment], after: list[Segment]) -> list[Segment]:
    """Segments of `before` whose id no longer appears in `after`."""
    surviving = {seg.id for seg in after}
    return [seg for seg in before if seg.id not in surviving]
