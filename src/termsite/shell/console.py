"""Terminal front ends for the interpreter.

The interactive console is a full-screen prompt_toolkit application: key
bindings turn keypresses into keyboard actions for an
:class:`Interpreter`, and the screen is drawn straight from its output
surface. Non-interactive output is printed with rich.
"""

from __future__ import annotations

import asyncio
import html
import logging
import sys
from typing import Iterable

from prompt_toolkit import Application
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.output import Output
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.text import Text

from termsite.commands import build_registry
from termsite.config.settings import Settings
from termsite.contact.client import ContactClient
from termsite.contact.form import ContactForm
from termsite.domain.models import KeyboardAction, KeyCombo, Keystroke, OutputLine, OutputStyle, TextInput
from termsite.shell.interpreter import Interpreter
from termsite.telemetry.reporter import SessionReporter

logger = logging.getLogger(__name__)

# Understood by both prompt_toolkit and rich
OUTPUT_STYLES = {
    OutputStyle.RESPONSE: "",
    OutputStyle.COMMAND: "bold #5fd75f",
    OutputStyle.ERROR: "#ff5f5f",
    OutputStyle.INFO: "#5fd7d7",
    OutputStyle.DIM: "#808080",
    OutputStyle.HEADER: "bold #ffd75f",
    OutputStyle.SUCCESS: "#5fd75f",
    OutputStyle.WARNING: "#ffaf00",
    OutputStyle.ASCII_ART: "#00af00",
}

CONSOLE_STYLE = Style.from_dict({
    "prompt": "bold #5fd75f",
    **{style.value: value for style, value in OUTPUT_STYLES.items()},
})

# prompt_toolkit key names to interpreter key names
KEY_NAMES = {
    "enter": "Enter",
    "up": "Up",
    "down": "Down",
    "tab": "Tab",
    "backspace": "Backspace",
    "escape": "Escape",
}

CTRL_KEYS = ("c", "l")


def render_fragments(shell: Interpreter) -> StyleAndTextTuples:
    """Scrollback followed by the prompt line, cursor at the end."""
    fragments: StyleAndTextTuples = []
    for line in shell.output.lines:
        fragments.append((f"class:{line.style.value}", html.unescape(line.text)))
        fragments.append(("", "\n"))
    if not shell.is_closed:
        fragments.append(("class:prompt", f"{shell.current_prompt} "))
        fragments.append(("", shell.input_buffer))
        fragments.append(("[SetCursorPosition]", ""))
    return fragments


def paste_actions(data: str) -> list[KeyboardAction]:
    """Split pasted text into typed text and Enter presses."""
    actions: list[KeyboardAction] = []
    lines = data.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    for i, line in enumerate(lines):
        text = "".join(ch for ch in line if ch.isprintable())
        if text:
            actions.append(TextInput(text=text))
        if i < len(lines) - 1:
            actions.append(Keystroke(key="Enter"))
    return actions


def build_key_bindings(shell: Interpreter) -> KeyBindings:
    """Key bindings that forward every keypress to ``shell``."""
    kb = KeyBindings()

    def send(event: KeyPressEvent, actions: Iterable[KeyboardAction]) -> None:
        for action in actions:
            if shell.is_closed:
                return
            shell.handle_key(action)
            if shell.is_closed:
                event.app.exit()

    for name, key in KEY_NAMES.items():
        @kb.add(name)
        def _(event: KeyPressEvent, key: str = key) -> None:
            send(event, [Keystroke(key=key)])

    for letter in CTRL_KEYS:
        @kb.add(f"c-{letter}")
        def _(event: KeyPressEvent, letter: str = letter) -> None:
            send(event, [KeyCombo(modifiers=["ctrl"], key=letter)])

    @kb.add("c-d")
    def _(event: KeyPressEvent) -> None:
        if not shell.is_closed:
            shell.close()
            event.app.exit()

    @kb.add(Keys.BracketedPaste)
    def _(event: KeyPressEvent) -> None:
        send(event, paste_actions(event.data))

    @kb.add(Keys.Any)
    def _(event: KeyPressEvent) -> None:
        if event.data.isprintable():
            send(event, [TextInput(text=event.data)])

    return kb


class ConsoleApp:
    """Full-screen console bound to one interpreter.

    Redraws whenever the output surface changes; the app exits once the
    interpreter is closed by ``exit`` or Ctrl+D.
    """

    def __init__(
        self,
        shell: Interpreter,
        input: Input | None = None,
        output: Output | None = None,
    ) -> None:
        self._shell = shell
        control = FormattedTextControl(
            lambda: render_fragments(shell),
            focusable=True,
            show_cursor=True,
        )
        self.app: Application[None] = Application(
            layout=Layout(Window(control, wrap_lines=True)),
            key_bindings=build_key_bindings(shell),
            style=CONSOLE_STYLE,
            full_screen=True,
            input=input,
            output=output,
        )
        shell.output.add_listener(on_line=self._on_line, on_clear=self._on_clear)

    @property
    def shell(self) -> Interpreter:
        return self._shell

    def _on_line(self, line: OutputLine) -> None:
        self.app.invalidate()

    def _on_clear(self) -> None:
        self.app.invalidate()

    async def run(self) -> None:
        self._shell.start()
        await self.app.run_async()


def print_output(lines: Iterable[OutputLine], console: Console | None = None) -> None:
    """Print output lines with their styles, entities decoded."""
    console = console or Console(highlight=False, soft_wrap=True)
    for line in lines:
        console.print(Text(html.unescape(line.text), style=OUTPUT_STYLES[line.style]))


def build_interpreter(settings: Settings) -> Interpreter:
    """Wire an interpreter with telemetry and the contact form from settings."""
    t = settings.telemetry
    reporter = None
    if t.enabled:
        reporter = SessionReporter(
            base_url=t.base_url,
            session_path=t.session_path,
            log_path=t.log_path,
            timeout=t.timeout,
        )
    form = ContactForm(ContactClient(base_url=t.base_url, path=t.contact_path, timeout=t.timeout))
    return Interpreter.from_settings(
        settings, build_registry(), reporter=reporter, contact_form=form
    )


async def run_app(console: ConsoleApp, exit_timeout: float) -> None:
    """Run ``console`` and shut its interpreter down within ``exit_timeout``."""
    shell = console.shell
    try:
        await console.run()
    finally:
        await shell.drain(timeout=exit_timeout)
        if shell.reporter is not None:
            await shell.reporter.aclose()
        logger.info("Console session ended")


def run_console(settings: Settings) -> None:
    """Run the interactive console on the controlling terminal."""
    if not sys.stdin.isatty():
        raise RuntimeError("The console needs an interactive terminal")
    console = ConsoleApp(build_interpreter(settings))
    asyncio.run(run_app(console, settings.shell.exit_timeout))
