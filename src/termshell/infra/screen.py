"""Infrastructure: platform screen clearing.

Rules
-----
* Runs the platform's own clear command (``cls`` / ``clear``).
* Raw ``subprocess`` / OS errors never escape — they are re-raised as
  :class:`~termshell.exceptions.ScreenClearError`.
* No user-facing output — the session reports failures.
"""

from __future__ import annotations

import platform
import subprocess

from termshell.exceptions import ScreenClearError


def clear_command() -> tuple[list[str] | str, bool]:
    """Return ``(args, shell)`` for the current platform's clear command.

    ``cls`` is a ``cmd.exe`` builtin and needs a shell; ``clear`` is a
    regular executable.
    """
    if platform.system().lower() == "windows":
        return "cls", True
    return ["clear"], False


def clear_screen() -> None:
    """Clear the visible terminal screen.

    Raises
    ------
    ScreenClearError
        When the clear command is missing or exits with an error.
    """
    args, shell = clear_command()
    try:
        subprocess.run(args, shell=shell, check=True)
    except subprocess.CalledProcessError as exc:
        raise ScreenClearError(
            f"clear command exited with status {exc.returncode}",
        ) from exc
    except OSError as exc:
        raise ScreenClearError(
            f"clear command could not be run: {exc}",
            hint="Install ncurses (for 'clear') or disable clearing on start.",
        ) from exc
