"""Interactive contact form shown inside the terminal.

While open, the form owns the Enter key: each submitted line answers the
current field. Escape or Ctrl+C closes it. When every field is answered
the request is sent in the background and the outcome printed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from termsite.contact.client import ContactClient, ContactError
from termsite.domain.models import (
    CONTACT_METHODS,
    SERVICES,
    URGENCIES,
    ContactRequest,
    OutputStyle,
    is_valid_email,
)
from termsite.security.guard import escape_html

if TYPE_CHECKING:
    from termsite.shell.interpreter import Interpreter

logger = logging.getLogger(__name__)

SENT_MESSAGE = "Message sent successfully! We will contact you soon."
FAILED_MESSAGE = "Error sending message. Please try again or contact directly."


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    required: bool = True
    choices: tuple[str, ...] = ()
    default: str | None = None
    check: Callable[[str], bool] | None = None
    error: str = "This field is required."


FIELDS = (
    FormField("name", "Name"),
    FormField("email", "Email", check=is_valid_email, error="Please enter a valid email address."),
    FormField("phone", "Phone (optional)", required=False),
    FormField("service", "Service", choices=SERVICES, error="Choose one of the listed services."),
    FormField("urgency", "Urgency", choices=URGENCIES, error="Choose one of the listed options."),
    FormField("message", "Message"),
    FormField(
        "contact_method",
        "Preferred contact",
        choices=CONTACT_METHODS,
        default="email",
        error="Choose one of the listed options.",
    ),
)


class ContactForm:
    """Collects :class:`ContactRequest` fields one line at a time."""

    def __init__(self, client: ContactClient) -> None:
        self._client = client
        self._answers: dict[str, str] = {}
        self._index = 0
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def current_field(self) -> FormField | None:
        return FIELDS[self._index] if self._open else None

    @property
    def current_prompt(self) -> str:
        field = self.current_field
        return f"{field.label}:" if field else ""

    def show(self, shell: Interpreter) -> None:
        self._answers = {}
        self._index = 0
        self._open = True
        shell.print("  Answer each field and press Enter. Escape cancels.", OutputStyle.DIM)
        self._prompt(shell)

    def cancel(self, shell: Interpreter) -> None:
        if not self._open:
            return
        self._open = False
        self._answers = {}
        shell.print("  Contact form closed.", OutputStyle.DIM)

    def answer(self, shell: Interpreter, text: str) -> None:
        field = self.current_field
        if field is None:
            return
        value = text.strip()
        shell.print(f"  > {escape_html(value)}", OutputStyle.DIM)

        if not value and field.default is not None:
            value = field.default
        if field.choices:
            value = value.lower()
            if value.isdigit() and 1 <= int(value) <= len(field.choices):
                value = field.choices[int(value) - 1]

        if not self._accepts(field, value):
            shell.print(f"  {field.error}", OutputStyle.ERROR)
            self._prompt(shell)
            return

        if value:
            self._answers[field.name] = value
        self._index += 1
        if self._index < len(FIELDS):
            self._prompt(shell)
            return

        self._open = False
        request = ContactRequest(**self._answers)
        self._answers = {}
        shell.print("  Sending...", OutputStyle.INFO)
        shell.spawn(self._submit(shell, request))

    @staticmethod
    def _accepts(field: FormField, value: str) -> bool:
        if not value:
            return not field.required
        if field.choices:
            return value in field.choices
        if field.check is not None:
            return field.check(value)
        return True

    def _prompt(self, shell: Interpreter) -> None:
        field = FIELDS[self._index]
        shell.print(f"  {field.label}:", OutputStyle.INFO)
        if field.choices:
            options = "  ".join(f"[{i}] {c}" for i, c in enumerate(field.choices, start=1))
            shell.print(f"    {options}", OutputStyle.DIM)

    async def _submit(self, shell: Interpreter, request: ContactRequest) -> None:
        try:
            await self._client.submit(request)
        except ContactError as e:
            logger.warning("Contact form error: %s", e)
            shell.print(f"  {FAILED_MESSAGE}", OutputStyle.ERROR)
            return
        shell.print(f"  {SENT_MESSAGE}", OutputStyle.SUCCESS)
