"""The read-eval-print core of the terminal.

Ties together input gating, history, telemetry and command dispatch.
Each submission runs: echo -> rate check -> sanitize -> record + report
-> tokenize -> dispatch, and always ends back in the idle state.
Everything runs on one event loop; only network work is detached.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Callable, Coroutine, Iterable

import httpx

from termsite.commands.pages import BANNER, WELCOME
from termsite.commands.registry import CommandRegistry
from termsite.domain.models import (
    InterpreterState,
    KeyboardAction,
    KeyCombo,
    Keystroke,
    OutputStyle,
    TextInput,
)
from termsite.security.guard import InputGuard, escape_html
from termsite.shell.history import HistoryNavigator
from termsite.shell.output import OutputBuffer

if TYPE_CHECKING:
    from termsite.config.settings import Settings
    from termsite.contact.form import ContactForm
    from termsite.telemetry.reporter import SessionReporter

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "guest@trusik:~$"


class Interpreter:
    """One terminal instance: input buffer, history, rate state, output.

    Example usage::

        shell = Interpreter(registry=build_registry())
        shell.start()
        shell.submit("help")
        print(shell.output.render_text())
    """

    def __init__(
        self,
        registry: CommandRegistry,
        guard: InputGuard | None = None,
        history: HistoryNavigator | None = None,
        reporter: SessionReporter | None = None,
        output: OutputBuffer | None = None,
        contact_form: ContactForm | None = None,
        prompt: str = DEFAULT_PROMPT,
        user: str = "guest",
        hostname: str = "trusik.com",
        show_welcome: bool = True,
        http_transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._registry = registry
        self._clock = clock
        self._guard = guard or InputGuard(clock=clock)
        self._history = history or HistoryNavigator()
        self._reporter = reporter
        self._output = output or OutputBuffer()
        self._contact_form = contact_form
        self._prompt = prompt
        self._user = user
        self._hostname = hostname
        self._show_welcome = show_welcome
        self._http_transport = http_transport
        self._started_at = clock()
        self._state = InterpreterState.IDLE
        self._closed = False
        self._tasks: set[asyncio.Task] = set()
        self.input_buffer = ""

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        registry: CommandRegistry,
        reporter: SessionReporter | None = None,
        contact_form: ContactForm | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> Interpreter:
        g = settings.guard
        guard = InputGuard(
            max_commands=g.max_commands,
            window_seconds=g.window_seconds,
            block_seconds=g.block_seconds,
            max_length=g.max_input_length,
            clock=clock,
        )
        sh = settings.shell
        return cls(
            registry=registry,
            guard=guard,
            history=HistoryNavigator(max_size=settings.history.max_size),
            reporter=reporter,
            output=OutputBuffer(scrollback_lines=sh.scrollback_lines),
            contact_form=contact_form,
            prompt=sh.prompt,
            user=sh.user,
            hostname=sh.hostname,
            show_welcome=sh.show_welcome,
            clock=clock,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def guard(self) -> InputGuard:
        return self._guard

    @property
    def history(self) -> HistoryNavigator:
        return self._history

    @property
    def output(self) -> OutputBuffer:
        return self._output

    @property
    def reporter(self) -> SessionReporter | None:
        return self._reporter

    @property
    def contact_form(self) -> ContactForm | None:
        return self._contact_form

    @property
    def state(self) -> InterpreterState:
        return self._state

    @property
    def prompt(self) -> str:
        return self._prompt

    @property
    def current_prompt(self) -> str:
        """Prompt for the line being typed; the open form's field if any."""
        if self._form_open:
            return self._contact_form.current_prompt
        return self._prompt

    @property
    def user(self) -> str:
        return self._user

    @property
    def hostname(self) -> str:
        return self._hostname

    @property
    def uptime_seconds(self) -> int:
        return int(self._clock() - self._started_at)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    @property
    def _form_open(self) -> bool:
        return self._contact_form is not None and self._contact_form.is_open

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def print(self, text: str = "", style: OutputStyle = OutputStyle.RESPONSE) -> None:
        """Append a markup-safe line to the output surface."""
        self._output.append(text, style)

    def print_lines(self, lines: Iterable[str], style: OutputStyle = OutputStyle.RESPONSE) -> None:
        for line in lines:
            self.print(line, style)

    def print_page(self, rows: Iterable[tuple[str, OutputStyle]]) -> None:
        for text, style in rows:
            self.print(text, style)

    def print_art(self, art: str) -> None:
        self.print(escape_html(art), OutputStyle.ASCII_ART)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Show the banner and request a telemetry session in the background."""
        if self._show_welcome:
            self.show_welcome()
        if self._reporter is not None:
            self.spawn(self._reporter.start())

    def show_welcome(self) -> None:
        self.print_art(BANNER)
        self.print_page(WELCOME)

    def close(self) -> None:
        self._closed = True
        logger.info("Interpreter closed")

    # ------------------------------------------------------------------
    # Read-eval-print
    # ------------------------------------------------------------------

    def submit(self, line: str | None = None) -> None:
        """Process one submitted line (the input buffer when ``line`` is None)."""
        raw = (self.input_buffer if line is None else line).strip()
        self.input_buffer = ""

        self.print(f"{self._prompt} {escape_html(raw)}", OutputStyle.COMMAND)

        if not raw:
            return

        try:
            self._evaluate(raw)
        finally:
            self._state = InterpreterState.IDLE

    def _evaluate(self, raw: str) -> None:
        self._state = InterpreterState.VALIDATING

        decision = self._guard.check_rate()
        if not decision.allowed:
            self.print(decision.message, OutputStyle.ERROR)
            return

        checked = self._guard.sanitize(raw)
        if not checked.safe:
            self.print(checked.reason, OutputStyle.ERROR)
            return

        self._history.record(raw)
        if self._reporter is not None:
            self._reporter.log(raw)

        parts = checked.value.lower().split()
        name, args = parts[0], parts[1:]

        if not self._registry.exists(name):
            self.print(
                f"Command not found: {name}. Type 'help' for available commands.",
                OutputStyle.ERROR,
            )
            return

        self._state = InterpreterState.EXECUTING
        try:
            self._registry.dispatch(name, args, self)
        except Exception:
            logger.exception("Command %s raised", name)
            self.print(f"{name}: command failed", OutputStyle.ERROR)

    # ------------------------------------------------------------------
    # Keyboard contract
    # ------------------------------------------------------------------

    def handle_key(self, action: KeyboardAction) -> None:
        """Apply one keyboard action from a front end."""
        if isinstance(action, TextInput):
            self.input_buffer += action.text
            return

        if isinstance(action, KeyCombo):
            if not action.is_ctrl:
                return
            key = action.key.lower()
            if key == "c":
                if self._form_open:
                    self._contact_form.cancel(self)
                    self.input_buffer = ""
                else:
                    self.interrupt()
            elif key == "l":
                self.clear_screen()
            return

        key = action.key
        if key in ("Enter", "Return"):
            if self._form_open:
                answer, self.input_buffer = self.input_buffer, ""
                self._contact_form.answer(self, answer)
            else:
                self.submit()
        elif key == "Backspace":
            self.input_buffer = self.input_buffer[:-1]
        elif key == "Escape" and self._form_open:
            self._contact_form.cancel(self)
            self.input_buffer = ""
        elif self._form_open:
            return
        elif key == "Up":
            self.navigate_history(-1)
        elif key == "Down":
            self.navigate_history(1)
        elif key == "Tab":
            self.autocomplete()

    def navigate_history(self, direction: int) -> None:
        recalled = self._history.navigate(direction)
        if recalled is not None:
            self.input_buffer = recalled

    def autocomplete(self) -> list[str]:
        """Complete the input buffer against public command names."""
        partial = self.input_buffer.lower()
        if not partial:
            return []
        matches = self._registry.complete(partial)
        if len(matches) == 1:
            self.input_buffer = matches[0]
        elif len(matches) > 1:
            self.print("  ".join(matches), OutputStyle.INFO)
        return matches

    def interrupt(self) -> None:
        self.input_buffer = ""
        self.print("^C", OutputStyle.DIM)

    def clear_screen(self) -> None:
        self._output.clear()

    # ------------------------------------------------------------------
    # Background work
    # ------------------------------------------------------------------

    def http_client(self) -> httpx.AsyncClient:
        """Client for commands that fetch external data. No timeout."""
        return httpx.AsyncClient(timeout=None, transport=self._http_transport)

    def spawn(self, coro: Coroutine) -> asyncio.Task | None:
        """Run ``coro`` detached; its result and errors are discarded."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            logger.warning("No running event loop, background task dropped")
            return None
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug("Background task failed: %s", exc)

    async def drain(self, timeout: float | None = None) -> None:
        """Wait until every detached task has finished.

        With ``timeout``, tasks still running after that many seconds are
        cancelled. Command fetches have no timeout of their own, so front
        ends pass one when shutting down.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while self._tasks:
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                break
            await asyncio.wait(list(self._tasks), timeout=remaining)

        stuck = list(self._tasks)
        if stuck:
            logger.warning("Cancelling %d background task(s) still running", len(stuck))
            for task in stuck:
                task.cancel()
            await asyncio.gather(*stuck, return_exceptions=True)

        if self._reporter is not None:
            await self._reporter.drain()
