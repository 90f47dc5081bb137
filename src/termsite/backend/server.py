"""FastAPI backend for session telemetry and contact requests.

Endpoints:

    POST /api/session/start  -> {"sessionId": "..."}
    POST /api/log            <- {"sessionId": "...", "command": "...", "timestamp": "..."}
    POST /api/contact        <- contact form fields -> {"success": true, "id": "..."}
    GET  /health             -> {"status": "ok"}
    *    /logs/...           -> 403

Errors are returned as ``{"error": "<message>"}`` with a 4xx/5xx status.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from termsite.backend.storage import ContactStore, SessionLogStore, StorageError
from termsite.domain.models import is_valid_email
from termsite.security.guard import escape_html

logger = logging.getLogger(__name__)

CONTACT_REQUIRED = ("name", "email", "service", "urgency", "message", "contact_method")
_CONTACT_ESCAPED = CONTACT_REQUIRED + ("phone",)


class HealthResponse(BaseModel):
    status: str = "ok"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded
    return request.client.host if request.client else "Unknown"


async def _json_body(request: Request) -> dict[str, Any] | None:
    """Parse the body as a non-empty JSON object, or return None."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict) or not body:
        return None
    return body


def create_app(
    logs_dir: Path | str = "logs",
    contacts_dir: Path | str = "contacts",
    session_store: SessionLogStore | None = None,
    contact_store: ContactStore | None = None,
) -> FastAPI:
    """Create the backend application.

    Args:
        logs_dir: Directory for per-session command logs.
        contacts_dir: Directory for contact request files.
        session_store: Optional pre-configured store (for testing).
        contact_store: Optional pre-configured store (for testing).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.sessions.directory.mkdir(parents=True, exist_ok=True)
        logger.info(
            "Backend started (logs: %s, contacts: %s)",
            app.state.sessions.directory,
            app.state.contacts.directory,
        )
        yield
        logger.info("Backend stopped")

    app = FastAPI(
        title="termsite Backend",
        description="Session telemetry and contact intake for the termsite shell",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.sessions = session_store or SessionLogStore(logs_dir)
    app.state.contacts = contact_store or ContactStore(contacts_dir)

    @app.get("/health")
    async def health_check() -> HealthResponse:
        return HealthResponse()

    @app.api_route("/logs", methods=["GET", "POST", "PUT", "DELETE", "HEAD"])
    @app.api_route("/logs/{path:path}", methods=["GET", "POST", "PUT", "DELETE", "HEAD"])
    async def deny_logs(request: Request) -> JSONResponse:
        logger.warning("Blocked log directory access from %s", _client_ip(request))
        return _error(403, "Access denied")

    @app.post("/api/session/start")
    async def start_session(request: Request) -> JSONResponse:
        store: SessionLogStore = app.state.sessions
        try:
            session_id = store.start(
                user_agent=request.headers.get("user-agent", "Unknown"),
                ip=_client_ip(request),
            )
        except StorageError as e:
            logger.error("Error creating session log: %s", e)
            return _error(500, "Failed to create session")
        return JSONResponse({"sessionId": session_id})

    @app.post("/api/log")
    async def log_command(request: Request) -> JSONResponse:
        body = await _json_body(request)
        if body is None:
            return _error(400, "Invalid JSON")

        session_id = body.get("sessionId")
        command = body.get("command")
        if not session_id or not command:
            return _error(400, "Missing sessionId or command")

        store: SessionLogStore = app.state.sessions
        try:
            store.append(str(session_id), str(command), body.get("timestamp"))
        except StorageError as e:
            logger.error("Error writing log: %s", e)
            return _error(500, "Failed to write log")
        return JSONResponse({"success": True})

    @app.post("/api/contact")
    async def submit_contact(request: Request) -> JSONResponse:
        body = await _json_body(request)
        if body is None:
            return _error(400, "Invalid JSON")

        for field in CONTACT_REQUIRED:
            if not body.get(field):
                return _error(400, f"Missing required field: {field}")

        email = str(body["email"]).strip()
        if not is_valid_email(email):
            return _error(400, "Invalid email address")

        fields = {f: escape_html(str(body[f])) for f in _CONTACT_ESCAPED if body.get(f)}
        fields["email"] = escape_html(email)
        if body.get("timestamp"):
            fields["timestamp"] = escape_html(str(body["timestamp"]))

        store: ContactStore = app.state.contacts
        try:
            contact_id = store.save(
                fields,
                ip=_client_ip(request),
                user_agent=request.headers.get("user-agent", "Unknown"),
            )
        except StorageError as e:
            logger.error("Error saving contact request: %s", e)
            return _error(500, "Failed to save contact request")
        return JSONResponse({"success": True, "id": contact_id})

    return app


def serve(
    host: str = "0.0.0.0",
    port: int = 3000,
    logs_dir: Path | str = "logs",
    contacts_dir: Path | str = "contacts",
) -> None:
    """Run the backend with uvicorn until interrupted."""
    app = create_app(logs_dir=logs_dir, contacts_dir=contacts_dir)
    uvicorn.run(app, host=host, port=port)
