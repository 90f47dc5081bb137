"""Hidden commands: executable, never listed.

Mostly shell look-alikes and easter eggs, plus the detailed service
pages linked from the public ones. ``myip`` is the one command that does
network work; it runs detached and reports back by appending lines.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import httpx

from termsite.commands import pages
from termsite.commands.registry import CommandRegistry
from termsite.domain.models import OutputStyle
from termsite.security.guard import escape_html

if TYPE_CHECKING:
    from termsite.shell.interpreter import Interpreter

logger = logging.getLogger(__name__)

IP_LOOKUP_URLS = (
    "https://api.ipify.org?format=json",
    "https://ipapi.co/json/",
)

VERSION = "1.0.0"
BUILD = "2024.01"


def myip(shell: Interpreter, args: list[str]) -> None:
    shell.print("Fetching IP information...", OutputStyle.DIM)
    shell.spawn(_lookup_ip(shell))


async def _lookup_ip(shell: Interpreter) -> None:
    async with shell.http_client() as client:
        for url in IP_LOOKUP_URLS:
            try:
                resp = await client.get(url)
                resp.raise_for_status()
                ip = resp.json()["ip"]
            except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
                logger.debug("IP lookup via %s failed: %s", url, e)
                continue
            shell.print("")
            shell.print("IP INFORMATION", OutputStyle.HEADER)
            shell.print(*pages.rule(40))
            shell.print(f"  Your IP: {escape_html(str(ip))}", OutputStyle.INFO)
            shell.print("")
            return
    shell.print("Unable to fetch IP information.", OutputStyle.ERROR)


def security(shell: Interpreter, args: list[str]) -> None:
    shell.print("")
    shell.print("SECURITY STATUS", OutputStyle.HEADER)
    shell.print(*pages.rule(40))
    shell.print("")
    for label in (
        "Content Security Policy   ",
        "XSS Protection            ",
        "Input Sanitization        ",
        "Rate Limiting             ",
        "Command Injection Guard   ",
        "Telemetry Isolation       ",
    ):
        shell.print(f"  [✓] {label}  ACTIVE", OutputStyle.SUCCESS)
    shell.print("")
    shell.print(
        f"  Commands this session: {shell.guard.state.count}/{shell.guard.max_commands} per minute",
        OutputStyle.DIM,
    )
    shell.print("")


def software(shell: Interpreter, args: list[str]) -> None:
    shell.print_page(pages.SOFTWARE)


def version(shell: Interpreter, args: list[str]) -> None:
    shell.print(f"{shell.hostname} terminal v{VERSION}", OutputStyle.INFO)
    shell.print(f"Build: {BUILD}", OutputStyle.DIM)


def uptime(shell: Interpreter, args: list[str]) -> None:
    hours, rest = divmod(shell.uptime_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    shell.print(f"Session uptime: {hours}h {minutes}m {seconds}s")


def status(shell: Interpreter, args: list[str]) -> None:
    shell.print("")
    shell.print("SYSTEM STATUS", OutputStyle.HEADER)
    shell.print(*pages.rule(40))
    shell.print("  All systems operational.", OutputStyle.SUCCESS)
    shell.print(f"  Memory: {_memory_mb()}", OutputStyle.DIM)
    shell.print(f"  Commands executed: {len(shell.history)}", OutputStyle.DIM)
    shell.print("")


def _memory_mb() -> str:
    if sys.platform == "win32":
        return "N/A"
    import resource

    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    divisor = 1048576 if sys.platform == "darwin" else 1024
    return f"{peak / divisor:.2f} MB"


def matrix(shell: Interpreter, args: list[str]) -> None:
    shell.print_lines(
        ["Wake up, Neo...", "The Matrix has you...", "Follow the white rabbit."],
        OutputStyle.SUCCESS,
    )


def admin(shell: Interpreter, args: list[str]) -> None:
    shell.print("ACCESS DENIED", OutputStyle.ERROR)
    shell.print("Authentication required.", OutputStyle.WARNING)


def login(shell: Interpreter, args: list[str]) -> None:
    shell.print("Login functionality disabled for guest users.", OutputStyle.WARNING)


def ping(shell: Interpreter, args: list[str]) -> None:
    target = args[0] if args else "localhost"
    shell.print(f"PING {target}")
    for seq, ms in enumerate(("0.042", "0.038", "0.041"), start=1):
        shell.print(f"64 bytes: seq={seq} ttl=64 time={ms}ms")
    shell.print("")
    shell.print("--- ping statistics ---", OutputStyle.DIM)
    shell.print("3 packets transmitted, 3 received, 0% packet loss")


def neofetch(shell: Interpreter, args: list[str]) -> None:
    shell.print_art(pages.NEOFETCH)


def credits(shell: Interpreter, args: list[str]) -> None:
    shell.print("")
    shell.print("CREDITS", OutputStyle.HEADER)
    shell.print(*pages.rule(40))
    shell.print(f"  Developed for {shell.hostname}")
    shell.print("  Built with Python and asyncio", OutputStyle.DIM)
    shell.print("")


def history(shell: Interpreter, args: list[str]) -> None:
    shell.print("")
    shell.print("COMMAND HISTORY", OutputStyle.HEADER)
    shell.print(*pages.rule(40))
    entries = shell.history.entries
    if not entries:
        shell.print("  No commands in history.", OutputStyle.DIM)
    for i, line in enumerate(entries, start=1):
        shell.print(f"  {i}  {escape_html(line)}")
    shell.print("")


def exit_shell(shell: Interpreter, args: list[str]) -> None:
    shell.print("Goodbye!", OutputStyle.INFO)
    shell.close()


def sudo(shell: Interpreter, args: list[str]) -> None:
    shell.print("Nice try. This incident will be reported.", OutputStyle.WARNING)


def ls(shell: Interpreter, args: list[str]) -> None:
    shell.print("drwxr-xr-x  about/")
    shell.print("drwxr-xr-x  services/")
    shell.print("-rw-r--r--  welcome.txt")


def cat(shell: Interpreter, args: list[str]) -> None:
    if args and args[0] == "welcome.txt":
        shell.print(f"Welcome to {shell.hostname}!")
        shell.print('Type "info" to learn more about our services.', OutputStyle.DIM)
    else:
        shell.print(f"cat: {args[0] if args else 'file'}: No such file", OutputStyle.ERROR)


def pwd(shell: Interpreter, args: list[str]) -> None:
    shell.print(f"/home/{shell.user}")


def hostname(shell: Interpreter, args: list[str]) -> None:
    shell.print(shell.hostname)


def uname(shell: Interpreter, args: list[str]) -> None:
    if "-a" in args:
        shell.print(f"TrusikOS {shell.hostname} {VERSION} Web Browser x86_64")
    else:
        shell.print("TrusikOS")


def _page(page: pages.Page):
    def show(shell: Interpreter, args: list[str]) -> None:
        shell.print_page(page)

    return show


def contact_form(shell: Interpreter, args: list[str]) -> None:
    shell.print("")
    shell.print("CONTACT FORM", OutputStyle.HEADER)
    shell.print(*pages.rule(50))
    shell.print("")
    if shell.contact_form is None:
        shell.print("  Contact form unavailable. Please try again later.", OutputStyle.ERROR)
        shell.print("")
        return
    shell.print("  Opening contact form...", OutputStyle.INFO)
    shell.print("")
    shell.contact_form.show(shell)


def register_hidden(registry: CommandRegistry) -> None:
    for name, handler in (
        ("myip", myip),
        ("security", security),
        ("software", software),
        ("version", version),
        ("uptime", uptime),
        ("status", status),
        ("matrix", matrix),
        ("admin", admin),
        ("login", login),
        ("ping", ping),
        ("neofetch", neofetch),
        ("credits", credits),
        ("history", history),
        ("exit", exit_shell),
        ("sudo", sudo),
        ("ls", ls),
        ("cat", cat),
        ("pwd", pwd),
        ("hostname", hostname),
        ("uname", uname),
        ("ai-security", _page(pages.AI_SECURITY)),
        ("pentest", _page(pages.PENTEST)),
        ("data-recovery", _page(pages.DATA_RECOVERY)),
        ("pricing", _page(pages.PRICING)),
        ("projects", _page(pages.PROJECTS)),
        ("certifications", _page(pages.CERTIFICATIONS)),
        ("availability", _page(pages.AVAILABILITY)),
        ("emergency", _page(pages.EMERGENCY)),
        ("contact-form", contact_form),
    ):
        registry.register(name, handler, hidden=True)
