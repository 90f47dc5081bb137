"""HTTP backend: session telemetry logs and contact intake."""

from termsite.backend.server import create_app, serve
from termsite.backend.storage import ContactStore, SessionLogStore, StorageError

__all__ = ["ContactStore", "SessionLogStore", "StorageError", "create_app", "serve"]
