"""Command registry and the built-in command set.

Public API:
    CommandRegistry -- name to handler table
    build_registry -- the standard public + hidden command set, frozen
"""

from termsite.commands.registry import CommandEntry, CommandRegistry, RegistryError

__all__ = ["CommandEntry", "CommandRegistry", "RegistryError", "build_registry"]


def build_registry() -> CommandRegistry:
    """Build the frozen registry of every built-in command."""
    from termsite.commands.builtin import register_public
    from termsite.commands.hidden import register_hidden

    registry = CommandRegistry()
    register_public(registry)
    register_hidden(registry)
    return registry.freeze()
