"""Tests for the prompt_toolkit console and rich output."""

from __future__ import annotations

import asyncio
import io
from typing import Iterator

import httpx
import pytest
from prompt_toolkit.input import PipeInput, create_pipe_input
from prompt_toolkit.output import DummyOutput
from rich.console import Console

from termsite.commands.registry import CommandRegistry
from termsite.domain.models import Keystroke, OutputLine, OutputStyle, TextInput
from termsite.shell.console import (
    ConsoleApp,
    paste_actions,
    print_output,
    render_fragments,
    run_app,
)
from termsite.shell.interpreter import Interpreter


@pytest.fixture
def pipe_input() -> Iterator[PipeInput]:
    with create_pipe_input() as inp:
        yield inp


def _console(shell: Interpreter, pipe_input: PipeInput) -> ConsoleApp:
    return ConsoleApp(shell, input=pipe_input, output=DummyOutput())


class TestRenderFragments:
    """Screen contents drawn from the output surface."""

    def test_lines_then_prompt(self, shell: Interpreter) -> None:
        shell.print("a &amp; b", OutputStyle.ERROR)
        shell.input_buffer = "he"
        fragments = render_fragments(shell)
        assert fragments[0] == ("class:output-error", "a & b")
        assert fragments[-3:] == [
            ("class:prompt", "guest@trusik:~$ "),
            ("", "he"),
            ("[SetCursorPosition]", ""),
        ]

    def test_no_prompt_once_closed(self, shell: Interpreter) -> None:
        shell.close()
        assert render_fragments(shell) == []


class TestPasteActions:
    def test_lines_become_enter_presses(self) -> None:
        assert paste_actions("help\r\nwhoami") == [
            TextInput(text="help"),
            Keystroke(key="Enter"),
            TextInput(text="whoami"),
        ]

    def test_multibyte_text_kept(self) -> None:
        assert paste_actions("café ✓") == [TextInput(text="café ✓")]

    def test_control_characters_dropped(self) -> None:
        assert paste_actions("a\x07b\n") == [TextInput(text="ab"), Keystroke(key="Enter")]


class TestPrintOutput:
    def test_plain_text_when_not_a_terminal(self) -> None:
        stream = io.StringIO()
        console = Console(file=stream, color_system=None, highlight=False, soft_wrap=True)
        print_output(
            [
                OutputLine(text="a &amp; [b]", style=OutputStyle.HEADER),
                OutputLine(text=""),
            ],
            console,
        )
        assert stream.getvalue() == "a & [b]\n\n"


class TestConsoleApp:
    """Keypresses fed through a pipe into a running app."""

    @pytest.mark.asyncio
    async def test_command_round_trip(self, shell: Interpreter, pipe_input: PipeInput) -> None:
        console = _console(shell, pipe_input)
        pipe_input.send_text("whoami\rexit\r")
        await asyncio.wait_for(console.run(), 5)
        assert "guest" in shell.output.texts()
        assert "whoami" in shell.history.entries
        assert shell.is_closed

    @pytest.mark.asyncio
    async def test_ctrl_d_ends(self, shell: Interpreter, pipe_input: PipeInput) -> None:
        console = _console(shell, pipe_input)
        pipe_input.send_text("he\x04")
        await asyncio.wait_for(console.run(), 5)
        assert shell.is_closed
        assert shell.input_buffer == "he"

    @pytest.mark.asyncio
    async def test_up_recalls_history(self, shell: Interpreter, pipe_input: PipeInput) -> None:
        console = _console(shell, pipe_input)
        pipe_input.send_text("whoami\r\x1b[A\x04")
        await asyncio.wait_for(console.run(), 5)
        assert shell.input_buffer == "whoami"

    @pytest.mark.asyncio
    async def test_ctrl_l_clears(self, shell: Interpreter, pipe_input: PipeInput) -> None:
        console = _console(shell, pipe_input)
        pipe_input.send_text("whoami\r\x0c\x04")
        await asyncio.wait_for(console.run(), 5)
        assert len(shell.output) == 0

    @pytest.mark.asyncio
    async def test_bracketed_paste(self, shell: Interpreter, pipe_input: PipeInput) -> None:
        console = _console(shell, pipe_input)
        pipe_input.send_text("\x1b[200~echo café\r\n\x1b[201~\x04")
        await asyncio.wait_for(console.run(), 5)
        assert "café" in shell.output.texts()


class TestRunApp:
    @pytest.mark.asyncio
    async def test_exit_does_not_wait_on_stuck_lookup(
        self, registry: CommandRegistry, clock, pipe_input: PipeInput
    ) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.Event().wait()
            raise AssertionError("unreachable")

        shell = Interpreter(
            registry=registry,
            show_welcome=False,
            http_transport=httpx.MockTransport(handler),
            clock=clock,
        )
        console = _console(shell, pipe_input)
        pipe_input.send_text("myip\rexit\r")
        await asyncio.wait_for(run_app(console, exit_timeout=0.05), 5)
        assert shell.is_closed
        assert shell.pending_tasks == 0
