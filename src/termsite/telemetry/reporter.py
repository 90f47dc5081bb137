"""Best-effort command telemetry.

Acquires a session identifier from the backend once, then reports every
accepted command against it. Delivery is at most once: no retries, no
queue for commands issued before the identifier arrives, and failures
never reach the interactive loop.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from termsite.domain.models import LogEntry, Session

logger = logging.getLogger(__name__)


class SessionReporter:
    """Sends accepted commands to the backend's log endpoint.

    Example usage::

        reporter = SessionReporter(base_url="http://localhost:3000")
        await reporter.start()
        reporter.log("help")      # returns immediately
        await reporter.aclose()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        session_path: str = "/api/session/start",
        log_path: str = "/api/log",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session_path = session_path
        self._log_path = log_path
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._session: Session | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def session_id(self) -> str | None:
        return self._session.id if self._session else None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def start(self) -> None:
        """Request a session identifier. Failures leave it unset."""
        client = self._ensure_client()
        try:
            resp = await client.post(self._session_path)
            resp.raise_for_status()
            self._session = Session(id=resp.json()["sessionId"])
            logger.info("Telemetry session %s started", self._session.id)
        except Exception as e:
            logger.debug("Telemetry session unavailable: %s", e)

    def log(self, command: str) -> asyncio.Task | None:
        """Report ``command`` in the background. No-op without a session."""
        if self._session is None:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, command not reported")
            return None
        entry = LogEntry(session_id=self._session.id, command=command)
        task = loop.create_task(self._send(entry))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _send(self, entry: LogEntry) -> None:
        client = self._ensure_client()
        try:
            resp = await client.post(self._log_path, json=entry.model_dump(by_alias=True))
            resp.raise_for_status()
        except Exception as e:
            logger.debug("Telemetry log dropped: %s", e)

    async def drain(self) -> None:
        """Wait for in-flight reports to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        await self.drain()
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> SessionReporter:
        await self.start()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.aclose()
