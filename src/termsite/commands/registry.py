"""Name-to-handler registry for shell commands.

Every command shares one dispatch contract. The only difference between
public and hidden commands is discoverability: public ones appear in
``help`` and autocomplete, hidden ones run but are never listed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from termsite.shell.interpreter import Interpreter

logger = logging.getLogger(__name__)

CommandHandler = Callable[["Interpreter", list[str]], None]


@dataclass(frozen=True)
class CommandEntry:
    name: str
    handler: CommandHandler
    description: str | None = None
    hidden: bool = False


class CommandRegistry:
    """Case-insensitive command table preserving registration order.

    Example usage::

        registry = CommandRegistry()

        @registry.command("whoami", "Display current user")
        def whoami(shell, args):
            shell.print(shell.user)

        registry.freeze()
    """

    def __init__(self) -> None:
        self._entries: dict[str, CommandEntry] = {}
        self._frozen = False

    def register(
        self,
        name: str,
        handler: CommandHandler,
        description: str | None = None,
        hidden: bool = False,
    ) -> CommandEntry:
        if self._frozen:
            raise RegistryError(f"Registry is frozen, cannot add {name!r}", command=name)
        key = name.lower()
        if not key or key.split() != [key]:
            raise RegistryError(f"Invalid command name: {name!r}", command=name)
        if key in self._entries:
            raise RegistryError(f"Duplicate command: {key}", command=key)
        if hidden and description is not None:
            raise RegistryError(f"Hidden command {key} must not carry a description", command=key)
        if not hidden and not description:
            raise RegistryError(f"Public command {key} needs a description", command=key)

        entry = CommandEntry(name=key, handler=handler, description=description, hidden=hidden)
        self._entries[key] = entry
        return entry

    def command(
        self, name: str, description: str | None = None, hidden: bool = False
    ) -> Callable[[CommandHandler], CommandHandler]:
        """Decorator form of :meth:`register`."""

        def decorator(handler: CommandHandler) -> CommandHandler:
            self.register(name, handler, description=description, hidden=hidden)
            return handler

        return decorator

    def freeze(self) -> CommandRegistry:
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def exists(self, name: str) -> bool:
        """Whether the first whitespace-delimited token of ``name`` is a command."""
        token = _first_token(name)
        return bool(token) and token in self._entries

    def get(self, name: str) -> CommandEntry | None:
        return self._entries.get(_first_token(name))

    def dispatch(self, name: str, args: list[str], shell: Interpreter) -> None:
        """Run the handler for ``name``. Unknown names are ignored."""
        entry = self.get(name)
        if entry is None:
            logger.debug("Dispatch for unknown command %r ignored", name)
            return
        entry.handler(shell, args)

    def list_public(self) -> list[CommandEntry]:
        return [e for e in self._entries.values() if not e.hidden]

    def complete(self, partial: str) -> list[str]:
        """Public command names starting with ``partial``."""
        prefix = partial.lower()
        return [e.name for e in self.list_public() if e.name.startswith(prefix)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name)

    def __len__(self) -> int:
        return len(self._entries)


def _first_token(text: str) -> str:
    parts = text.lower().split()
    return parts[0] if parts else ""


class RegistryError(Exception):
    """Raised when a command cannot be registered."""

    def __init__(self, message: str, command: str = "") -> None:
        super().__init__(message)
        self.command = command
