"""Command-line interface for termsite.

Provides the main entry point for running the interactive console,
executing commands non-interactively, or starting the backend server.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from termsite.domain.models import OutputLine

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="termsite",
        description="Terminal-style consulting site shell and backend",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/termsite.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("shell", help="Run the interactive terminal")
    exec_parser = subparsers.add_parser(
        "exec",
        help="Run command lines without a terminal and print the output",
    )
    exec_parser.add_argument("lines", nargs="+", help="Command lines to submit in order")
    subparsers.add_parser("serve", help="Start the telemetry and contact backend")

    return parser.parse_args(argv)


async def _exec_lines(settings, lines: list[str]) -> list[OutputLine]:
    """Submit ``lines`` to a fresh interpreter and return its output."""
    from termsite.shell.console import build_interpreter

    settings.telemetry.enabled = False
    settings.shell.show_welcome = False
    shell = build_interpreter(settings)
    shell.start()
    for line in lines:
        shell.submit(line)
        await shell.drain(timeout=settings.shell.exit_timeout)
        if shell.is_closed:
            break
    return shell.output.lines


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the termsite CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from termsite.config.settings import load_settings
    from termsite.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging, console=args.command != "shell")

    if args.command == "shell":
        logger.info("Starting console (telemetry: %s)", settings.telemetry.base_url)
        from termsite.shell.console import run_console
        try:
            run_console(settings)
        except RuntimeError as e:
            print(f"termsite: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "exec":
        from termsite.shell.console import print_output
        print_output(asyncio.run(_exec_lines(settings, args.lines)))

    elif args.command == "serve":
        be = settings.backend
        logger.info("Starting backend on %s:%d", be.host, be.port)
        from termsite.backend.server import serve
        serve(
            host=be.host,
            port=be.port,
            logs_dir=be.logs_dir,
            contacts_dir=be.contacts_dir,
        )


if __name__ == "__main__":
    main()
