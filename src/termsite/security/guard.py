"""Input gating applied to every submitted line.

Two independent checks run before a line is treated as a command: a
fixed-window rate limiter with a hard block on overflow, and a
pattern-based content filter that also entity-escapes accepted text.
The filter is a heuristic denylist, not a parser.
"""

from __future__ import annotations

import logging
import math
import re
import time
from typing import Callable

from termsite.domain.models import RateDecision, RateState, SanitizeResult

logger = logging.getLogger(__name__)

INPUT_TOO_LONG = "Input too long"
INVALID_INPUT = "Invalid input detected"

SUSPICIOUS_PATTERNS = [
    (re.compile(r"<script", re.IGNORECASE), "Script tag"),
    (re.compile(r"javascript:", re.IGNORECASE), "Scripting URI"),
    (re.compile(r"on\w+\s*=", re.IGNORECASE), "Inline event handler"),
    (re.compile(r"eval\s*\(", re.IGNORECASE), "Eval call"),
    (re.compile(r"document\.", re.IGNORECASE), "Document access"),
    (re.compile(r"window\.", re.IGNORECASE), "Window access"),
    (re.compile(r"\.\./"), "Directory traversal"),
    (re.compile(r"/etc/"), "Sensitive path"),
    (re.compile(r"\$\{"), "Template interpolation"),
    (re.compile(r"`"), "Backtick"),
]

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


def escape_html(text: str) -> str:
    """Entity-escape ``& < > " '`` so text is never read as markup."""
    return text.translate(_HTML_ESCAPES)


class InputGuard:
    """Rate limiter and content sanitizer for one interpreter.

    The window counter resets once ``window_seconds`` have elapsed since
    the window opened. Exceeding ``max_commands`` within a window sets a
    hard block that rejects every check until it expires, even across a
    window reset. The first check after the block expires opens a new
    window.
    """

    def __init__(
        self,
        max_commands: int = 30,
        window_seconds: float = 60.0,
        block_seconds: float = 30.0,
        max_length: int = 200,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_commands = max_commands
        self._window_seconds = window_seconds
        self._block_seconds = block_seconds
        self._max_length = max_length
        self._clock = clock
        self.state = RateState(window_start=clock())

    @property
    def max_commands(self) -> int:
        return self._max_commands

    def check_rate(self, now: float | None = None) -> RateDecision:
        """Count one attempt against the current window.

        The first attempt after a block expires opens a fresh window, even
        when the window the block started in has not yet ended.
        """
        if now is None:
            now = self._clock()
        state = self.state

        if now - state.window_start > self._window_seconds:
            state.count = 0
            state.window_start = now

        if state.blocked_until is not None:
            if now < state.blocked_until:
                remaining = math.ceil(state.blocked_until - now)
                return RateDecision(
                    allowed=False,
                    retry_after=remaining,
                    message=f"Rate limited. Try again in {remaining}s.",
                )
            # Block served; start a fresh window.
            state.blocked_until = None
            state.count = 0
            state.window_start = now

        state.count += 1

        if state.count > self._max_commands:
            state.blocked_until = now + self._block_seconds
            logger.info(
                "Rate limit exceeded (%d in window), blocking for %ss",
                state.count, self._block_seconds,
            )
            return RateDecision(
                allowed=False,
                retry_after=math.ceil(self._block_seconds),
                message="Too many commands. Temporarily blocked.",
            )

        return RateDecision(allowed=True)

    def sanitize(self, line: str) -> SanitizeResult:
        """Validate ``line`` and return its escaped form. Pure."""
        if len(line) > self._max_length:
            return SanitizeResult(safe=False, reason=INPUT_TOO_LONG)

        for pattern, label in SUSPICIOUS_PATTERNS:
            if pattern.search(line):
                logger.debug("Rejected input (%s): %r", label, line[:50])
                return SanitizeResult(safe=False, reason=INVALID_INPUT)

        return SanitizeResult(safe=True, value=escape_html(line))
