"""Core domain models for the termsite system.

These models represent the data flowing through the interpreter: keyboard
actions arriving from a front end, lines written to the output surface,
guard decisions, and the session/log/contact records exchanged with the
backend.
"""

from __future__ import annotations

import enum
import re
from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class OutputStyle(str, enum.Enum):
    """Visual class of a line on the output surface."""

    RESPONSE = "output-response"
    COMMAND = "output-command"
    ERROR = "output-error"
    INFO = "output-info"
    DIM = "output-dim"
    HEADER = "output-header"
    SUCCESS = "output-success"
    WARNING = "output-warning"
    ASCII_ART = "ascii-art"


class InterpreterState(str, enum.Enum):
    """Where the interpreter is within a single submission."""

    IDLE = "idle"
    VALIDATING = "validating"
    EXECUTING = "executing"


# ---------------------------------------------------------------------------
# Output Models
# ---------------------------------------------------------------------------


class OutputLine(BaseModel):
    """A single line on the output surface.

    ``text`` is markup-safe: anything user-supplied has already been
    entity escaped before it gets here.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Escaped line content")
    style: OutputStyle = Field(default=OutputStyle.RESPONSE)


# ---------------------------------------------------------------------------
# Guard Models
# ---------------------------------------------------------------------------


class RateState(BaseModel):
    """Fixed-window counter plus hard-block deadline, in clock seconds."""

    count: int = Field(default=0, ge=0)
    window_start: float = Field(default=0.0)
    blocked_until: float | None = Field(default=None)


class RateDecision(BaseModel):
    """Outcome of a rate check."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    retry_after: int = Field(default=0, ge=0, description="Whole seconds until unblocked")
    message: str = Field(default="")


class SanitizeResult(BaseModel):
    """Outcome of content validation.

    When ``safe`` is true, ``value`` holds the entity-escaped line;
    otherwise ``reason`` explains the rejection.
    """

    model_config = ConfigDict(frozen=True)

    safe: bool
    value: str = Field(default="")
    reason: str = Field(default="")


# ---------------------------------------------------------------------------
# Keyboard Action Models (discriminated union)
# ---------------------------------------------------------------------------


class Keystroke(BaseModel):
    """A single non-character key press (e.g., Enter, Tab, Up)."""

    model_config = ConfigDict(frozen=True)

    action_type: Literal["keystroke"] = "keystroke"
    key: str = Field(description="The key pressed (e.g., 'Enter', 'Tab', 'Up')")


class KeyCombo(BaseModel):
    """A key combination (e.g., Ctrl+C, Ctrl+L)."""

    model_config = ConfigDict(frozen=True)

    action_type: Literal["key_combo"] = "key_combo"
    modifiers: list[str] = Field(description="Modifier keys (e.g., ['ctrl'])")
    key: str = Field(description="The main key in the combination")

    @property
    def is_ctrl(self) -> bool:
        return "ctrl" in [m.lower() for m in self.modifiers]


class TextInput(BaseModel):
    """Printable text typed into the input buffer."""

    model_config = ConfigDict(frozen=True)

    action_type: Literal["text_input"] = "text_input"
    text: str = Field(description="The typed characters")


KeyboardAction = Annotated[
    Union[Keystroke, KeyCombo, TextInput],
    Field(discriminator="action_type"),
]


# ---------------------------------------------------------------------------
# Telemetry / Backend Models
# ---------------------------------------------------------------------------


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = moment or utc_now()
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class Session(BaseModel):
    """A server-issued telemetry session."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(pattern=r"^[A-Za-z0-9_-]+$", description="Opaque session token")
    created_at: datetime = Field(default_factory=utc_now)


class LogEntry(BaseModel):
    """Wire format of one accepted command sent to the log endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    command: str
    timestamp: str = Field(default_factory=iso_timestamp)


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


SERVICES = (
    "ai-security",
    "pentest",
    "data-recovery",
    "cloud",
    "forensics",
    "reverse-eng",
    "consulting",
    "other",
)
URGENCIES = ("standard", "urgent", "emergency")
CONTACT_METHODS = ("email", "signal", "phone")


class ContactRequest(BaseModel):
    """A consultation request submitted through the contact form."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str | None = Field(default=None)
    service: str = Field(min_length=1)
    urgency: str = Field(min_length=1)
    message: str = Field(min_length=1)
    contact_method: str = Field(default="email", min_length=1)
    timestamp: str = Field(default_factory=iso_timestamp)
