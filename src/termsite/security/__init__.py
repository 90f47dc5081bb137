"""Input gating: rate limiting and content sanitization."""

from termsite.security.guard import InputGuard, escape_html

__all__ = ["InputGuard", "escape_html"]
