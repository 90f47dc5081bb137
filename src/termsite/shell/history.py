"""Bounded command history with recall cursor."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class HistoryNavigator:
    """Keeps the most recent accepted lines and a cursor for recall.

    The cursor sits "one past last" after every ``record`` so the first
    ``navigate(-1)`` returns the newest entry. Consecutive duplicates are
    collapsed; there is no wraparound.
    """

    def __init__(self, max_size: int = 50) -> None:
        self._max_size = max_size
        self._entries: list[str] = []
        self._cursor = 0

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, line: str) -> None:
        if not self._entries or self._entries[-1] != line:
            self._entries.append(line)
            if len(self._entries) > self._max_size:
                self._entries.pop(0)
        self._cursor = len(self._entries)

    def navigate(self, direction: int) -> str | None:
        """Move the cursor by ``direction`` (-1 older, +1 newer).

        Returns the line to place in the input buffer, an empty string
        when moving past the newest entry, or None when nothing changes.
        """
        new_index = self._cursor + direction

        if 0 <= new_index < len(self._entries):
            self._cursor = new_index
            return self._entries[new_index]
        if new_index >= len(self._entries):
            self._cursor = len(self._entries)
            return ""
        # Already at the oldest entry
        if self._entries:
            return self._entries[self._cursor]
        return None
