"""Plain-text file stores behind the backend routes.

Session logs live in ``<logs_dir>/session_<id>.txt``: a header written
when the session starts, then one ``[timestamp] command`` line per
reported command. Contact requests are written one file each to
``<contacts_dir>/contact_<id>.txt``.
"""

from __future__ import annotations

import hashlib
import logging
import re
import secrets
import time
from datetime import datetime
from pathlib import Path

from termsite.domain.models import iso_timestamp

logger = logging.getLogger(__name__)

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_DIGITS36 = "0123456789abcdefghijklmnopqrstuvwxyz"


class StorageError(Exception):
    """Raised when a record cannot be written."""


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_DIGITS36[rem])
    return "".join(reversed(digits))


def new_session_id(now: float | None = None) -> str:
    """Base36 epoch seconds followed by 16 random hex characters."""
    seconds = int(time.time() if now is None else now)
    return to_base36(seconds) + secrets.token_hex(8)


def clean_session_id(session_id: str) -> str:
    """Strip everything but ``[A-Za-z0-9_-]`` so the id is path-safe."""
    return _UNSAFE_ID_CHARS.sub("", session_id)


class SessionLogStore:
    """Append-only per-session command logs."""

    def __init__(self, logs_dir: Path | str) -> None:
        self._dir = Path(logs_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, session_id: str) -> Path:
        return self._dir / f"session_{clean_session_id(session_id)}.txt"

    def start(self, user_agent: str = "Unknown", ip: str = "Unknown") -> str:
        """Create a new session log with its header and return the id."""
        session_id = new_session_id()
        header = (
            f"=== Session Started: {iso_timestamp()} ===\n"
            f"User-Agent: {user_agent}\n"
            f"IP: {ip}\n"
            f"{'=' * 50}\n\n"
        )
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            self.path_for(session_id).write_text(header, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to create session: {e}") from e
        logger.info("Session %s started from %s", session_id, ip)
        return session_id

    def append(self, session_id: str, command: str, timestamp: str | None = None) -> Path:
        """Append one command line to the session's log."""
        if not clean_session_id(session_id):
            raise StorageError("Session id has no usable characters")
        path = self.path_for(session_id)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            with open(path, "a", encoding="utf-8") as f:
                f.write(f"[{timestamp or iso_timestamp()}] {command}\n")
        except OSError as e:
            raise StorageError(f"Failed to write log: {e}") from e
        return path


class ContactStore:
    """Writes one text file per contact request."""

    def __init__(self, contacts_dir: Path | str) -> None:
        self._dir = Path(contacts_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    @staticmethod
    def contact_id(email: str, now: datetime | None = None) -> str:
        now = now or datetime.now()
        digest = hashlib.md5(email.encode("utf-8")).hexdigest()[:8]
        return f"{now:%Y%m%d_%H%M%S}_{digest}"

    def save(
        self,
        fields: dict[str, str],
        ip: str = "Unknown",
        user_agent: str = "Unknown",
    ) -> str:
        """Write ``fields`` (already escaped) and return the contact id."""
        contact_id = self.contact_id(fields["email"])
        content = (
            "=== CONTACT REQUEST ===\n"
            f"Timestamp: {fields.get('timestamp') or iso_timestamp()}\n"
            f"Contact ID: {contact_id}\n"
            "\n"
            f"NAME: {fields['name']}\n"
            f"EMAIL: {fields['email']}\n"
            f"PHONE: {fields.get('phone') or 'Not provided'}\n"
            f"SERVICE: {fields['service']}\n"
            f"URGENCY: {fields['urgency']}\n"
            f"PREFERRED CONTACT: {fields['contact_method']}\n"
            "\n"
            "MESSAGE:\n"
            f"{fields['message']}\n"
            "\n"
            f"IP: {ip}\n"
            f"User-Agent: {user_agent}\n"
            "========================\n"
        )
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            (self._dir / f"contact_{contact_id}.txt").write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to save contact request: {e}") from e
        logger.info("Contact request %s saved (%s, %s)", contact_id, fields["service"], fields["urgency"])
        return contact_id
