"""Append-only chat history kept in a text file."""

from __future__ import annotations

import threading
from collections import deque

DEFAULT_HISTORY_PATH = "chat_history.txt"
HISTORY_LINES = 100


class ChatHistory:
    """Chat log stored in a file, of which the last *limit* lines are replayed."""

    def __init__(self, path: str = DEFAULT_HISTORY_PATH, limit: int = HISTORY_LINES) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.path = path
        self.limit = limit
        self._lock = threading.Lock()

    def append(self, message: str) -> None:
        """Add *message* to the end of the log; a file that cannot be opened is skipped."""
        with self._lock:
            try:
                with open(self.path, "a", encoding="utf-8", newline="") as log:
                    log.write(message)
            except OSError:
                pass

    def recent(self) -> list[str]:
        """Return the last lines of the log, oldest first, with their line endings."""
        with self._lock:
            try:
                with open(self.path, encoding="utf-8", errors="replace", newline="") as log:
                    return list(deque(log, maxlen=self.limit))
            except OSError:
                return []