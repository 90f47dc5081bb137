"""Public commands, listed by ``help`` and offered by autocomplete.

Registration order here is the order ``help`` prints them in.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from termsite.commands import pages
from termsite.commands.registry import CommandRegistry
from termsite.domain.models import OutputStyle

if TYPE_CHECKING:
    from termsite.shell.interpreter import Interpreter

HELP_NAME_WIDTH = 14


def show_help(shell: Interpreter, args: list[str]) -> None:
    shell.print("")
    shell.print("AVAILABLE COMMANDS", OutputStyle.HEADER)
    shell.print(*pages.rule(40))
    for entry in shell.registry.list_public():
        # Always at least one space between name and description
        name = entry.name.ljust(HELP_NAME_WIDTH - 1)
        shell.print(f"  {name} {entry.description}")
    shell.print("")
    shell.print("Use arrow keys for command history, Tab for autocomplete.", OutputStyle.DIM)
    shell.print("")


def show_info(shell: Interpreter, args: list[str]) -> None:
    shell.print_page(pages.INFO)


def clear(shell: Interpreter, args: list[str]) -> None:
    shell.clear_screen()


def whoami(shell: Interpreter, args: list[str]) -> None:
    shell.print(shell.user)


def date(shell: Interpreter, args: list[str]) -> None:
    shell.print(datetime.now().astimezone().strftime("%a %b %d %Y %H:%M:%S %Z"))


def echo(shell: Interpreter, args: list[str]) -> None:
    shell.print(" ".join(args))


def show_services(shell: Interpreter, args: list[str]) -> None:
    shell.print_page(pages.SERVICES)


def show_contact(shell: Interpreter, args: list[str]) -> None:
    shell.print_page(pages.CONTACT)


def show_consultation(shell: Interpreter, args: list[str]) -> None:
    shell.print_page(pages.CONSULTATION)


def register_public(registry: CommandRegistry) -> None:
    registry.register("help", show_help, "Display available commands")
    registry.register("info", show_info, "Display business information")
    registry.register("clear", clear, "Clear the terminal screen")
    registry.register("whoami", whoami, "Display current user")
    registry.register("date", date, "Display current date and time")
    registry.register("echo", echo, "Echo a message")
    registry.register("services", show_services, "Overview of professional services")
    registry.register("contact", show_contact, "Get in touch")
    registry.register("consultation", show_consultation, "Request a consultation")
