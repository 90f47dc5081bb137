"""HTTP client for the backend's contact endpoint."""

from __future__ import annotations

import logging

import httpx

from termsite.domain.models import ContactRequest

logger = logging.getLogger(__name__)


class ContactClient:
    """Posts contact requests and returns the stored request id."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        path: str = "/api/contact",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._path = path
        self._timeout = timeout
        self._transport = transport

    async def submit(self, request: ContactRequest) -> str:
        """Send ``request``.

        Returns:
            The id assigned by the backend.

        Raises:
            ContactError: On transport failure, a non-2xx status, or a
                body without ``success``.
        """
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.post(self._path, json=request.model_dump(exclude_none=True))
            except httpx.HTTPError as e:
                raise ContactError(f"Contact request failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if resp.is_error or not body.get("success"):
            message = body.get("error") or f"HTTP {resp.status_code}"
            raise ContactError(message, status_code=resp.status_code)

        logger.info("Contact request stored as %s", body.get("id"))
        return str(body.get("id", ""))


class ContactError(Exception):
    """Raised when a contact request is not accepted."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
