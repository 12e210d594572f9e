from __future__ import annotations

import threading
import uuid

from movieshelf.core.time import now_millis


def new_uuid() -> str:
    """Generate a new UUID4 as a string."""
    return str(uuid.uuid4())


class MovieIdGenerator:
    """Millisecond-timestamp ids that never repeat within one process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def next_timestamp(self) -> int:
        with self._lock:
            candidate = now_millis()
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate


_default_generator = MovieIdGenerator()


def next_movie_timestamp() -> int:
    return _default_generator.next_timestamp()
