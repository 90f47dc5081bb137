"""Tests for the interpreter pipeline and keyboard handling."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from termsite.commands.registry import CommandRegistry
from termsite.domain.models import (
    InterpreterState,
    KeyCombo,
    Keystroke,
    OutputStyle,
    TextInput,
)
from termsite.shell.interpreter import Interpreter


def _errors(shell: Interpreter) -> list[str]:
    return shell.output.texts(OutputStyle.ERROR)


class TestSubmit:
    """The echo -> gate -> record -> dispatch pipeline."""

    def test_echoes_prompt_and_line(self, shell: Interpreter) -> None:
        shell.submit("whoami")
        first = shell.output.lines[0]
        assert first.style == OutputStyle.COMMAND
        assert first.text == "guest@trusik:~$ whoami"
        assert shell.output.texts()[1] == "guest"

    def test_echo_is_escaped(self, shell: Interpreter) -> None:
        shell.submit("echo <b>")
        assert shell.output.lines[0].text == "guest@trusik:~$ echo &lt;b&gt;"

    def test_empty_line_only_echoes(self, shell: Interpreter) -> None:
        shell.submit("   ")
        assert shell.output.texts() == ["guest@trusik:~$ "]
        assert shell.guard.state.count == 0
        assert len(shell.history) == 0

    def test_uses_input_buffer(self, shell: Interpreter) -> None:
        shell.input_buffer = "  whoami  "
        shell.submit()
        assert shell.input_buffer == ""
        assert shell.history.entries == ["whoami"]

    def test_unknown_command(self, shell: Interpreter) -> None:
        shell.submit("FOO bar")
        assert _errors(shell) == [
            "Command not found: foo. Type 'help' for available commands."
        ]
        assert shell.history.entries == ["FOO bar"]

    def test_command_name_case_insensitive(self, shell: Interpreter) -> None:
        shell.submit("WhoAmI")
        assert "guest" in shell.output.texts()

    def test_args_lowercased_and_escaped(self, shell: Interpreter) -> None:
        shell.submit("echo Hello <World>")
        assert shell.output.texts()[-1] == "hello &lt;world&gt;"
        assert shell.output.render_text().endswith("hello <world>")

    def test_rejected_input_not_recorded(self, shell: Interpreter) -> None:
        shell.submit("echo <script>")
        assert _errors(shell) == ["Invalid input detected"]
        assert len(shell.history) == 0
        assert shell.guard.state.count == 1

    def test_too_long_rejected(self, shell: Interpreter) -> None:
        shell.submit("echo " + "a" * 300)
        assert _errors(shell) == ["Input too long"]

    def test_history_stores_raw_line(self, shell: Interpreter) -> None:
        shell.submit("echo a & b")
        assert shell.history.entries == ["echo a & b"]

    def test_rate_limit(self, shell: Interpreter) -> None:
        for _ in range(30):
            shell.submit("whoami")
        shell.submit("whoami")
        assert _errors(shell) == ["Too many commands. Temporarily blocked."]
        shell.submit("whoami")
        assert _errors(shell)[-1] == "Rate limited. Try again in 30s."
        assert len(shell.history) == 1

    def test_rate_recovers_after_block(self, shell: Interpreter, clock) -> None:
        for _ in range(31):
            shell.submit("whoami")
        clock.advance(30)
        shell.submit("date")
        assert shell.history.entries[-1] == "date"

    def test_reporter_gets_raw_line(self, registry: CommandRegistry, clock) -> None:
        reporter = MagicMock()
        shell = Interpreter(registry=registry, reporter=reporter, show_welcome=False, clock=clock)
        shell.submit("  Echo a & b ")
        shell.submit("nope")
        shell.submit("<script>")
        assert [c.args[0] for c in reporter.log.call_args_list] == ["Echo a & b", "nope"]

    def test_handler_failure_reported(self, clock) -> None:
        r = CommandRegistry()

        def boom(shell, args) -> None:
            raise ValueError("broken")

        r.register("boom", boom, "Explodes")
        shell = Interpreter(registry=r, show_welcome=False, clock=clock)
        shell.submit("boom")
        assert _errors(shell) == ["boom: command failed"]
        assert shell.state == InterpreterState.IDLE

    def test_state_observed_during_dispatch(self, clock) -> None:
        r = CommandRegistry()
        seen: list[InterpreterState] = []
        r.register("inspect", lambda sh, args: seen.append(sh.state), "Inspect")
        shell = Interpreter(registry=r, show_welcome=False, clock=clock)
        shell.submit("inspect")
        assert seen == [InterpreterState.EXECUTING]
        assert shell.state == InterpreterState.IDLE


class TestKeys:
    """Keyboard actions from a front end."""

    def test_typing_and_enter(self, shell: Interpreter) -> None:
        shell.handle_key(TextInput(text="whoam"))
        shell.handle_key(TextInput(text="i"))
        shell.handle_key(Keystroke(key="Enter"))
        assert shell.history.entries == ["whoami"]

    def test_backspace(self, shell: Interpreter) -> None:
        shell.handle_key(TextInput(text="abc"))
        shell.handle_key(Keystroke(key="Backspace"))
        assert shell.input_buffer == "ab"

    def test_history_keys(self, shell: Interpreter) -> None:
        shell.submit("whoami")
        shell.submit("date")
        shell.handle_key(Keystroke(key="Up"))
        assert shell.input_buffer == "date"
        shell.handle_key(Keystroke(key="Up"))
        assert shell.input_buffer == "whoami"
        shell.handle_key(Keystroke(key="Down"))
        shell.handle_key(Keystroke(key="Down"))
        assert shell.input_buffer == ""

    def test_up_on_empty_history_keeps_buffer(self, shell: Interpreter) -> None:
        shell.input_buffer = "draft"
        shell.handle_key(Keystroke(key="Up"))
        assert shell.input_buffer == "draft"

    def test_tab_single_match(self, shell: Interpreter) -> None:
        shell.input_buffer = "se"
        shell.handle_key(Keystroke(key="Tab"))
        assert shell.input_buffer == "services"

    def test_tab_multiple_matches(self, shell: Interpreter) -> None:
        shell.input_buffer = "c"
        assert shell.autocomplete() == ["clear", "contact", "consultation"]
        assert shell.input_buffer == "c"
        assert shell.output.texts(OutputStyle.INFO) == ["clear  contact  consultation"]

    def test_tab_ignores_hidden_and_empty(self, shell: Interpreter) -> None:
        shell.input_buffer = "myi"
        assert shell.autocomplete() == []
        shell.input_buffer = ""
        assert shell.autocomplete() == []
        assert len(shell.output) == 0

    def test_ctrl_c(self, shell: Interpreter) -> None:
        shell.input_buffer = "partial"
        shell.handle_key(KeyCombo(modifiers=["ctrl"], key="c"))
        assert shell.input_buffer == ""
        assert shell.output.lines[-1].text == "^C"

    def test_ctrl_l_clears(self, shell: Interpreter) -> None:
        shell.submit("whoami")
        shell.handle_key(KeyCombo(modifiers=["Ctrl"], key="L"))
        assert len(shell.output) == 0

    def test_clear_command(self, shell: Interpreter) -> None:
        shell.submit("whoami")
        shell.submit("clear")
        assert len(shell.output) == 0


class TestLifecycle:
    """Welcome, exit and detached work."""

    def test_welcome_banner(self, registry: CommandRegistry, clock) -> None:
        shell = Interpreter(registry=registry, clock=clock)
        shell.start()
        styles = {line.style for line in shell.output.lines}
        assert OutputStyle.ASCII_ART in styles
        assert "services" in shell.output.render_text()

    def test_exit_closes(self, shell: Interpreter) -> None:
        shell.submit("exit")
        assert shell.is_closed
        assert "Goodbye!" in shell.output.texts()

    def test_spawn_without_loop_drops(self, shell: Interpreter) -> None:
        async def work() -> None:
            pass

        assert shell.spawn(work()) is None
        assert shell.pending_tasks == 0

    @pytest.mark.asyncio
    async def test_spawn_and_drain(self, shell: Interpreter) -> None:
        done: list[bool] = []

        async def work() -> None:
            await asyncio.sleep(0)
            done.append(True)

        task = shell.spawn(work())
        assert task is not None
        await shell.drain()
        assert done == [True]
        assert shell.pending_tasks == 0

    @pytest.mark.asyncio
    async def test_spawned_failure_is_contained(self, shell: Interpreter) -> None:
        async def fail() -> None:
            raise RuntimeError("nope")

        shell.spawn(fail())
        await shell.drain()
        assert shell.pending_tasks == 0

    def test_uptime(self, shell: Interpreter, clock) -> None:
        clock.advance(3725)
        shell.submit("uptime")
        assert shell.output.texts()[-1] == "Session uptime: 1h 2m 5s"
