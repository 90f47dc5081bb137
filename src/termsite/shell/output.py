"""The display surface commands write to.

Holds an ordered scrollback of styled, markup-safe lines and notifies
listeners as lines are appended or the surface is cleared, so a front
end can render incrementally.
"""

from __future__ import annotations

import html
import logging
from typing import Callable

from termsite.domain.models import OutputLine, OutputStyle

logger = logging.getLogger(__name__)

LineListener = Callable[[OutputLine], None]
ClearListener = Callable[[], None]


class OutputBuffer:
    """Scrollback of output lines with bounded length."""

    def __init__(self, scrollback_lines: int = 1000) -> None:
        self._scrollback_lines = scrollback_lines
        self._lines: list[OutputLine] = []
        self._line_listeners: list[LineListener] = []
        self._clear_listeners: list[ClearListener] = []

    @property
    def lines(self) -> list[OutputLine]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def add_listener(
        self,
        on_line: LineListener | None = None,
        on_clear: ClearListener | None = None,
    ) -> None:
        if on_line is not None:
            self._line_listeners.append(on_line)
        if on_clear is not None:
            self._clear_listeners.append(on_clear)

    def append(self, text: str = "", style: OutputStyle = OutputStyle.RESPONSE) -> OutputLine:
        line = OutputLine(text=text, style=style)
        self._lines.append(line)
        if len(self._lines) > self._scrollback_lines:
            self._lines = self._lines[-self._scrollback_lines:]
        for listener in self._line_listeners:
            listener(line)
        return line

    def clear(self) -> None:
        self._lines.clear()
        for listener in self._clear_listeners:
            listener()

    def texts(self, style: OutputStyle | None = None) -> list[str]:
        """Raw (escaped) text of every line, optionally filtered by style."""
        return [l.text for l in self._lines if style is None or l.style == style]

    def render_text(self) -> str:
        """Plain-text view of the surface with entities decoded."""
        return "\n".join(html.unescape(l.text) for l in self._lines)
