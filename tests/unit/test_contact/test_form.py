"""Tests for the in-terminal contact form."""

from __future__ import annotations

import json

import httpx
import pytest

from termsite.commands.registry import CommandRegistry
from termsite.contact.client import ContactClient
from termsite.contact.form import FAILED_MESSAGE, SENT_MESSAGE, ContactForm
from termsite.domain.models import KeyCombo, Keystroke, OutputStyle, TextInput
from termsite.shell.interpreter import Interpreter


class FakeBackend:
    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.received: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.received.append(json.loads(request.content))
        if self.status != 200:
            return httpx.Response(self.status, json={"error": "Failed to save contact request"})
        return httpx.Response(200, json={"success": True, "id": "x"})


def _shell(registry: CommandRegistry, clock, backend: FakeBackend) -> Interpreter:
    client = ContactClient(base_url="http://backend.test", transport=httpx.MockTransport(backend))
    return Interpreter(
        registry=registry,
        contact_form=ContactForm(client),
        show_welcome=False,
        clock=clock,
    )


def _answer(shell: Interpreter, text: str) -> None:
    shell.handle_key(TextInput(text=text))
    shell.handle_key(Keystroke(key="Enter"))


ANSWERS = ["Ada Lovelace", "ada@example.com", "", "2", "urgent", "Audit please", ""]


class TestContactForm:
    """Field sequence, validation, submission and cancel."""

    def test_opens_from_command(self, registry: CommandRegistry, clock) -> None:
        shell = _shell(registry, clock, FakeBackend())
        shell.submit("contact-form")
        assert shell.contact_form.is_open
        assert shell.current_prompt == "Name:"

    @pytest.mark.asyncio
    async def test_full_submission(self, registry: CommandRegistry, clock) -> None:
        backend = FakeBackend()
        shell = _shell(registry, clock, backend)
        shell.submit("contact-form")
        for text in ANSWERS:
            _answer(shell, text)
        assert not shell.contact_form.is_open
        assert "  Sending..." in shell.output.texts(OutputStyle.INFO)
        await shell.drain()

        body = backend.received[0]
        assert body["name"] == "Ada Lovelace"
        assert body["service"] == "pentest"
        assert body["urgency"] == "urgent"
        assert body["contact_method"] == "email"
        assert "phone" not in body
        assert shell.output.texts(OutputStyle.SUCCESS)[-1] == f"  {SENT_MESSAGE}"

    @pytest.mark.asyncio
    async def test_backend_error(self, registry: CommandRegistry, clock) -> None:
        shell = _shell(registry, clock, FakeBackend(status=500))
        shell.submit("contact-form")
        for text in ANSWERS:
            _answer(shell, text)
        await shell.drain()
        assert shell.output.texts(OutputStyle.ERROR)[-1] == f"  {FAILED_MESSAGE}"

    def test_invalid_email_reprompts(self, registry: CommandRegistry, clock) -> None:
        shell = _shell(registry, clock, FakeBackend())
        shell.submit("contact-form")
        _answer(shell, "Ada")
        _answer(shell, "not-an-email")
        assert shell.current_prompt == "Email:"
        assert "  Please enter a valid email address." in shell.output.texts(OutputStyle.ERROR)
        _answer(shell, "ada@example.com")
        assert shell.current_prompt == "Phone (optional):"

    def test_invalid_choice_reprompts(self, registry: CommandRegistry, clock) -> None:
        shell = _shell(registry, clock, FakeBackend())
        shell.submit("contact-form")
        for text in ("Ada", "ada@example.com", "+43 1 234"):
            _answer(shell, text)
        _answer(shell, "99")
        assert shell.current_prompt == "Service:"
        _answer(shell, "Forensics")
        assert shell.current_prompt == "Urgency:"

    def test_required_field_reprompts(self, registry: CommandRegistry, clock) -> None:
        shell = _shell(registry, clock, FakeBackend())
        shell.submit("contact-form")
        _answer(shell, "")
        assert shell.current_prompt == "Name:"

    def test_answers_bypass_guard_and_history(self, registry: CommandRegistry, clock) -> None:
        shell = _shell(registry, clock, FakeBackend())
        shell.submit("contact-form")
        count = shell.guard.state.count
        _answer(shell, "<Ada>")
        assert shell.guard.state.count == count
        assert shell.history.entries == ["contact-form"]
        assert "  > &lt;Ada&gt;" in shell.output.texts()

    def test_escape_cancels(self, registry: CommandRegistry, clock) -> None:
        shell = _shell(registry, clock, FakeBackend())
        shell.submit("contact-form")
        shell.handle_key(TextInput(text="Ad"))
        shell.handle_key(Keystroke(key="Escape"))
        assert not shell.contact_form.is_open
        assert shell.input_buffer == ""
        assert shell.current_prompt == "guest@trusik:~$"

    def test_ctrl_c_cancels(self, registry: CommandRegistry, clock) -> None:
        shell = _shell(registry, clock, FakeBackend())
        shell.submit("contact-form")
        shell.handle_key(KeyCombo(modifiers=["ctrl"], key="c"))
        assert not shell.contact_form.is_open
        assert "  Contact form closed." in shell.output.texts()

    def test_history_keys_ignored_while_open(self, registry: CommandRegistry, clock) -> None:
        shell = _shell(registry, clock, FakeBackend())
        shell.submit("help")
        shell.submit("contact-form")
        shell.handle_key(Keystroke(key="Up"))
        shell.handle_key(Keystroke(key="Tab"))
        assert shell.input_buffer == ""
