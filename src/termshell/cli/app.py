"""CLI application entry point for termshell.

This module is the **sole error boundary** for the command-line tool.
It catches :class:`~termshell.exceptions.TermShellError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No session logic lives here — the session is built from settings and
  run; all behaviour is in the core and infrastructure layers.
* Session output goes to stdout through the session's sinks; messages
  from this module go to stderr via the console proxy.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from termshell.cli import exit_codes
from termshell.cli.console import console
from termshell.config import get_settings
from termshell.exceptions import TermShellError
from termshell.version import __version__

if TYPE_CHECKING:
    from termshell.config import Settings
    from termshell.core.protocols import LineSource


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Every option defaults to ``None`` so that unset flags fall through
    to ``TERMSHELL_*`` environment settings.
    """
    parser = argparse.ArgumentParser(
        prog="termshell",
        description="Prompt-driven terminal surface (interactive demo).",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--user", default=None, help="User shown in the prompt.")
    parser.add_argument(
        "--dir",
        dest="working_directory",
        default=None,
        help="Directory label shown in the prompt.",
    )
    parser.add_argument(
        "--timeout",
        dest="handler_timeout",
        type=float,
        default=None,
        help="Seconds before a handler call is reported as timed out.",
    )
    parser.add_argument(
        "--no-clear",
        dest="clear_on_start",
        action="store_false",
        default=None,
        help="Do not clear the screen when the session starts.",
    )
    parser.add_argument(
        "--handler-errors",
        choices=("report", "raise"),
        default=None,
        help="Report handler exceptions as errors, or let them end the session.",
    )
    parser.add_argument("--log-level", default=None, help="Log level (e.g. DEBUG).")
    return parser


# ---------------------------------------------------------------------------
# Session wiring
# ---------------------------------------------------------------------------

def _build_line_source(interactive: bool) -> LineSource:
    """Pick the prompt_toolkit reader for terminals, the stream reader for pipes."""
    from termshell.infra.line_sources import PromptToolkitLineSource, StreamLineSource

    if interactive:
        return PromptToolkitLineSource()
    return StreamLineSource(sys.stdin)


def _run_session(settings: Settings, *, interactive: bool) -> int:
    """Run the demo session until it closes."""
    from termshell.cli.demo import DemoHandler
    from termshell.core.session import TerminalSession

    handler = DemoHandler()
    session = TerminalSession.from_settings(
        settings,
        handler,
        line_source=_build_line_source(interactive),
        clear_on_start=settings.clear_on_start and interactive,
    )
    handler.bind(session)
    session.run()
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the termshell CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    from termshell.logging_utils import configure_logging

    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = get_settings(**vars(args))
    configure_logging(settings.log_level)

    return _run_session(settings, interactive=sys.stdin.isatty())


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except TermShellError as exc:
        console.print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
