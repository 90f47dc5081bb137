"""Session telemetry reported to the backend."""

from termsite.telemetry.reporter import SessionReporter

__all__ = ["SessionReporter"]
