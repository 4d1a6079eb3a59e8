"""Identifier sources for segments and bookmarks.

Uniqueness within a session is the only contract. Callers that need
deterministic ids (tests, manifest runs) pass a CounterIdSource; the
default everywhere else is a UuidIdSource.
"""

import itertools
import uuid
from typing import Protocol


class IdSource(Protocol):
    def next_id(self, prefix: str) -> str: ...


class CounterIdSource:
    """Monotonic ids: seg-1, seg-2, bm-3, ... (one counter for all prefixes)."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counter)}"


class UuidIdSource:
    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex[:12]}"


DEFAULT_ID_SOURCE = UuidIdSource()
