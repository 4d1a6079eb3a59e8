"""Editing session state and its transitions.

SessionState is immutable. Every edit is a plain function taking a state
and returning a new one, so the owner of the session decides when edits
happen and in which order. Only one structural edit (base load or
splice) should be applied to a given state at a time; nothing here locks.

Structural edits clear the bookmarks: their times refer to the old
timeline.
"""

from dataclasses import dataclass, replace

from .bookmarks import Bookmark, create_bookmark, remove_bookmark as _remove, resolve_bookmark_time
from .frames import DEFAULT_FPS, clamp, normalize_fps, to_seconds
from .ids import IdSource
from .segments import Segment
from .splice import removed_segments, splice_segments
from .timeline import compute_timeline, find_segment_at_time


@dataclass(frozen=True)
class SessionState:
    segments: tuple[Segment, ...] = ()
    fps: float = DEFAULT_FPS
    bookmarks: tuple[Bookmark, ...] = ()
    current_time: float = 0.0
    active_index: int = 0


@dataclass(frozen=True)
class SpliceOutcome:
    """Result of a splice: the new state and the segments it dropped.

    The caller releases whatever media handles the dropped segments hold.
    """

    state: SessionState
    removed: list[Segment]


def update_state(state: SessionState, **patch) -> SessionState:
    return replace(state, **patch)


def timeline_total(state: SessionState) -> float:
    return compute_timeline(list(state.segments)).total


def load_base_clip(state: SessionState, segment: Segment) -> SessionState:
    """Start over with a single-segment timeline."""
    return update_state(
        state,
        segments=(segment,),
        bookmarks=(),
        current_time=0.0,
        active_index=0,
    )


def set_fps(state: SessionState, value) -> SessionState:
    return update_state(state, fps=normalize_fps(value))


def seek(state: SessionState, time) -> SessionState:
    """Move the playhead, clamped to the timeline."""
    total = timeline_total(state)
    clamped = clamp(to_seconds(time), 0.0, total)
    location = find_segment_at_time(list(state.segments), clamped)
    return update_state(state, current_time=clamped, active_index=max(0, location.index))


def capture_bookmark(
    state: SessionState,
    image: str = "",
    id_source: IdSource | None = None,
) -> tuple[SessionState, Bookmark]:
    """Bookmark the playhead position."""
    bookmark = create_bookmark(state.current_time, state.fps, image, id_source=id_source)
    return update_state(state, bookmarks=state.bookmarks + (bookmark,)), bookmark


def remove_bookmark(state: SessionState, bookmark_id: str) -> SessionState:
    return update_state(state, bookmarks=tuple(_remove(list(state.bookmarks), bookmark_id)))


def clear_bookmarks(state: SessionState) -> SessionState:
    return update_state(state, bookmarks=())


def apply_replacement(
    state: SessionState,
    bookmark_id: str,
    segment: Segment | None,
) -> SpliceOutcome:
    """Splice `segment` in at the bookmark's cut time.

    Unknown bookmarks and a missing segment leave the state untouched.
    Otherwise the timeline is spliced, all bookmarks are cleared and the
    playhead moves to the cut.
    """
    cut_time = resolve_bookmark_time(list(state.bookmarks), bookmark_id)
    if segment is None or cut_time is None:
        return SpliceOutcome(state=state, removed=[])

    before = list(state.segments)
    after = splice_segments(before, cut_time, segment)
    spliced = update_state(
        state,
        segments=tuple(after),
        bookmarks=(),
        active_index=0,
    )
    return SpliceOutcome(state=seek(spliced, cut_time), removed=removed_segments(before, after))
