"""Domain models for termsite.

This package contains all core data structures, enumerations, and value
objects used throughout the system. All models use Pydantic v2 for
validation and serialization.
"""

from termsite.domain.models import (
    ContactRequest,
    InterpreterState,
    KeyboardAction,
    KeyCombo,
    Keystroke,
    LogEntry,
    OutputLine,
    OutputStyle,
    RateDecision,
    RateState,
    SanitizeResult,
    Session,
    TextInput,
)

__all__ = [
    "ContactRequest",
    "InterpreterState",
    "KeyboardAction",
    "KeyCombo",
    "Keystroke",
    "LogEntry",
    "OutputLine",
    "OutputStyle",
    "RateDecision",
    "RateState",
    "SanitizeResult",
    "Session",
    "TextInput",
]
