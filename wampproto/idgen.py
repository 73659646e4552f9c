"""Session-scoped request ID generation."""

from __future__ import annotations

import threading

MAX_ID = 1 << 53


class SessionScopeIDGenerator:
    """Hands out IDs 1, 2, 3, ... and wraps back to 1 after MAX_ID."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0

    def next_id(self) -> int:
        """Return the next ID; safe to call from several threads."""
        with self._lock:
            if self._current == MAX_ID:
                self._current = 0
            self._current += 1
            return self._current