"""Bookmarks — saved cut points on the composite timeline.

A bookmark records the composite time, the frame index at the fps in
effect when it was captured, and an opaque preview image reference
(typically a PNG data URL). Bookmarks are immutable; a collection only
ever loses entries.
"""

import math
from dataclasses import dataclass

from .frames import time_to_frame, to_seconds
from .ids import DEFAULT_ID_SOURCE, IdSource


@dataclass(frozen=True)
class Bookmark:
    id: str
    time: float
    frame: int
    image: str = ""

    def __post_init__(self):
        if not self.time >= 0:
            raise ValueError(f"Bookmark {self.id}: time must be >= 0, got {self.time!r}")
        if self.frame < 0:
            raise ValueError(f"Bookmark {self.id}: frame must be >= 0, got {self.frame}")


def create_bookmark(time, fps, image: str | None = "", id_source: IdSource | None = None) -> Bookmark:
    """Capture a cut point at `time` composite seconds."""
    seconds = max(0.0, to_seconds(time))
    ids = id_source or DEFAULT_ID_SOURCE
    return Bookmark(
        id=ids.next_id("bm"),
        time=seconds,
        frame=time_to_frame(seconds, fps),
        image=image or "",
    )


def find_bookmark(bookmarks: list[Bookmark] | None, bookmark_id: str | None) -> Bookmark | None:
    if not bookmark_id:
        return None
    for entry in bookmarks or []:
        if entry.id == bookmark_id:
            return entry
    return None


def resolve_bookmark_time(bookmarks: list[Bookmark] | None, bookmark_id: str | None) -> float | None:
    """Cut time of the bookmark with bookmark_id.

    Returns None for an empty id, an unknown id, or a bookmark whose
    time is not a finite number.
    """
    match = find_bookmark(bookmarks, bookmark_id)
    if match is None:
        return None
    return match.time if math.isfinite(match.time) else None


def remove_bookmark(bookmarks: list[Bookmark] | None, bookmark_id: str | None) -> list[Bookmark]:
    """Return the bookmarks without the entry matching bookmark_id."""
    return [entry for entry in bookmarks or [] if entry.id != bookmark_id]


def bookmark_filename(bookmark: Bookmark) -> str:
    """File name used when a bookmark's preview frame is saved."""
    return f"bookmark-{bookmark.frame or 0}.png"
