"""Tests for the best-effort session reporter."""

from __future__ import annotations

import json

import httpx
import pytest

from termsite.commands.registry import CommandRegistry
from termsite.shell.interpreter import Interpreter
from termsite.telemetry.reporter import SessionReporter


class RecordingBackend:
    """MockTransport handler that records log posts."""

    def __init__(self, session_status: int = 200, log_status: int = 200) -> None:
        self.session_status = session_status
        self.log_status = log_status
        self.logged: list[dict] = []
        self.session_requests = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/session/start":
            self.session_requests += 1
            if self.session_status != 200:
                return httpx.Response(self.session_status, json={"error": "nope"})
            return httpx.Response(200, json={"sessionId": "abc123"})
        if request.url.path == "/api/log":
            self.logged.append(json.loads(request.content))
            return httpx.Response(self.log_status, json={"success": True})
        return httpx.Response(404)


def _reporter(backend: RecordingBackend) -> SessionReporter:
    return SessionReporter(
        base_url="http://backend.test/",
        transport=httpx.MockTransport(backend),
    )


class TestSessionReporter:
    """Session acquisition and fire-and-forget logging."""

    def test_init_strips_trailing_slash(self) -> None:
        assert SessionReporter(base_url="http://x:3000/")._base_url == "http://x:3000"

    @pytest.mark.asyncio
    async def test_start_acquires_session(self) -> None:
        backend = RecordingBackend()
        reporter = _reporter(backend)
        await reporter.start()
        assert reporter.session_id == "abc123"
        await reporter.aclose()

    @pytest.mark.asyncio
    async def test_log_sends_entry(self) -> None:
        backend = RecordingBackend()
        async with _reporter(backend) as reporter:
            task = reporter.log("help")
            assert task is not None
            await reporter.drain()
        assert len(backend.logged) == 1
        entry = backend.logged[0]
        assert entry["sessionId"] == "abc123"
        assert entry["command"] == "help"
        assert entry["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    async def test_no_session_no_log(self) -> None:
        backend = RecordingBackend(session_status=500)
        async with _reporter(backend) as reporter:
            assert reporter.session_id is None
            assert reporter.log("help") is None
        assert backend.logged == []

    @pytest.mark.asyncio
    async def test_unreachable_backend_is_silent(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        reporter = SessionReporter(transport=httpx.MockTransport(handler))
        await reporter.start()
        assert reporter.session is None
        await reporter.aclose()

    @pytest.mark.asyncio
    async def test_log_failure_is_dropped(self) -> None:
        backend = RecordingBackend(log_status=500)
        async with _reporter(backend) as reporter:
            reporter.log("help")
            reporter.log("info")
            await reporter.drain()
        assert [e["command"] for e in backend.logged] == ["help", "info"]

    def test_log_without_loop(self) -> None:
        reporter = SessionReporter()
        assert reporter.log("help") is None


class TestInterpreterTelemetry:
    """Interpreter wiring: session on start, one log per accepted line."""

    @pytest.mark.asyncio
    async def test_accepted_lines_logged(self, registry: CommandRegistry, clock) -> None:
        backend = RecordingBackend()
        reporter = _reporter(backend)
        shell = Interpreter(registry=registry, reporter=reporter, show_welcome=False, clock=clock)
        shell.start()
        await shell.drain()
        assert backend.session_requests == 1

        shell.submit("help")
        shell.submit("bogus")
        shell.submit("echo <script>")
        shell.submit("")
        await shell.drain()
        await reporter.aclose()
        assert [e["command"] for e in backend.logged] == ["help", "bogus"]

    @pytest.mark.asyncio
    async def test_lines_before_session_not_logged(self, registry: CommandRegistry, clock) -> None:
        backend = RecordingBackend()
        reporter = _reporter(backend)
        shell = Interpreter(registry=registry, reporter=reporter, show_welcome=False, clock=clock)
        shell.submit("help")
        await reporter.start()
        shell.submit("info")
        await shell.drain()
        await reporter.aclose()
        assert [e["command"] for e in backend.logged] == ["info"]
