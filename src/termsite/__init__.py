"""termsite -- Terminal-style command shell for a consulting site.

The package implements a small command interpreter with rate limiting,
input sanitization and history, a catalogue of informational commands,
best-effort session telemetry and a contact form, plus the HTTP backend
that receives telemetry and contact requests.
"""

__version__ = "1.0.0"
