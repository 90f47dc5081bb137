"""Shared test fixtures for the termsite test suite.

Provides common fixtures used across unit tests: a controllable clock,
the standard command registry, and interpreters wired for isolation.
"""

from __future__ import annotations

import pytest

from termsite.commands import build_registry
from termsite.commands.registry import CommandRegistry
from termsite.security.guard import InputGuard
from termsite.shell.interpreter import Interpreter


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Clock / Guard Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    """A clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def guard(clock: FakeClock) -> InputGuard:
    """An InputGuard with default limits on the fake clock."""
    return InputGuard(clock=clock)


# ---------------------------------------------------------------------------
# Interpreter Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def registry() -> CommandRegistry:
    """The frozen built-in command registry."""
    return build_registry()


@pytest.fixture
def shell(registry: CommandRegistry, clock: FakeClock) -> Interpreter:
    """An interpreter with no telemetry, no contact form and no banner."""
    return Interpreter(registry=registry, show_welcome=False, clock=clock)
