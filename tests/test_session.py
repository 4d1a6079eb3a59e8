"""Tests for session state transitions.

Each transition returns a new SessionState; the previous one is left
as it was.
"""

import pytest

from clipsplice.segments import Segment
from clipsplice.session import (
    SessionState,
    apply_replacement,
    capture_bookmark,
    clear_bookmarks,
    load_base_clip,
    remove_bookmark,
    seek,
    set_fps,
    timeline_total,
    update_state,
)


def _seg(id, duration):
    return Segment(id=id, source=f"{id}.mp4", duration=duration, out_point=duration)


@pytest.fixture
def loaded():
    return load_base_clip(SessionState(), _seg("base", 10))


class TestLoadBaseClip:
    def test_single_segment_timeline(self, loaded):
        assert [s.id for s in loaded.segments] == ["base"]
        assert timeline_total(loaded) == 10

    def test_resets_time_and_bookmarks(self, loaded, ids):
        state = seek(loaded, 3)
        state, _ = capture_bookmark(state, id_source=ids)
        reloaded = load_base_clip(state, _seg("other", 5))
        assert reloaded.bookmarks == ()
        assert reloaded.current_time == 0
        assert reloaded.active_index == 0


class TestSimpleTransitions:
    def test_update_state_returns_new_state(self):
        state = SessionState()
        patched = update_state(state, current_time=2.0)
        assert patched.current_time == 2.0
        assert state.current_time == 0.0

    def test_set_fps_normalizes(self):
        assert set_fps(SessionState(), 24).fps == 24
        assert set_fps(SessionState(), -5).fps == 30

    def test_seek_clamps_to_timeline(self, loaded):
        assert seek(loaded, 42).current_time == 10
        assert seek(loaded, -1).current_time == 0

    def test_seek_tracks_active_index(self):
        state = SessionState(segments=(_seg("a", 4), _seg("b", 3)))
        assert seek(state, 5).active_index == 1
        assert seek(state, 4).active_index == 0

    def test_seek_on_empty_session(self):
        state = seek(SessionState(), 3)
        assert state.current_time == 0
        assert state.active_index == 0


class TestBookmarks:
    def test_capture_at_playhead(self, loaded, ids):
        state = seek(loaded, 4)
        state, bookmark = capture_bookmark(state, image="data:x", id_source=ids)
        assert bookmark.time == 4
        assert bookmark.frame == 120
        assert bookmark.image == "data:x"
        assert state.bookmarks == (bookmark,)

    def test_capture_uses_session_fps(self, loaded, ids):
        state = seek(set_fps(loaded, 10), 2)
        _, bookmark = capture_bookmark(state, id_source=ids)
        assert bookmark.frame == 20

    def test_remove_and_clear(self, loaded, ids):
        state, first = capture_bookmark(seek(loaded, 1), id_source=ids)
        state, second = capture_bookmark(seek(state, 2), id_source=ids)
        assert [b.id for b in remove_bookmark(state, first.id).bookmarks] == [second.id]
        assert clear_bookmarks(state).bookmarks == ()


class TestApplyReplacement:
    def test_splices_at_bookmark(self, loaded, ids):
        state, bookmark = capture_bookmark(seek(loaded, 4), id_source=ids)
        outcome = apply_replacement(state, bookmark.id, _seg("new", 6))
        result = outcome.state
        assert [s.id for s in result.segments] == ["base", "new"]
        assert result.segments[0].out_point == 4
        assert result.bookmarks == ()
        assert result.current_time == 4
        assert outcome.removed == []

    def test_replace_all_reports_removed(self, loaded, ids):
        state, bookmark = capture_bookmark(loaded, id_source=ids)
        outcome = apply_replacement(state, bookmark.id, _seg("new", 6))
        assert [s.id for s in outcome.state.segments] == ["new"]
        assert [s.id for s in outcome.removed] == ["base"]

    def test_unknown_bookmark_leaves_state(self, loaded):
        outcome = apply_replacement(loaded, "nope", _seg("new", 6))
        assert outcome.state is loaded
        assert outcome.removed == []

    def test_missing_segment_leaves_state(self, loaded, ids):
        state, bookmark = capture_bookmark(seek(loaded, 4), id_source=ids)
        outcome = apply_replacement(state, bookmark.id, None)
        assert outcome.state is state

    def test_previous_state_untouched(self, loaded, ids):
        state, bookmark = capture_bookmark(seek(loaded, 4), id_source=ids)
        apply_replacement(state, bookmark.id, _seg("new", 6))
        assert [s.id for s in state.segments] == ["base"]
        assert state.bookmarks == (bookmark,)
