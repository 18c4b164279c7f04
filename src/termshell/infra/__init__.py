"""Infrastructure layer — terminal, process and signal integration.

This layer wraps all interaction with the operating system: reading
lines from the terminal or a pipe, clearing the screen, and installing
the Ctrl+C handler.  Every raw OS exception is caught here and
re-raised as a :class:`~termshell.exceptions.TermShellError` subclass.

Rules
-----
* No imports from ``cli``.
* No rendering of handler results — that is the core's job.
* Must expose clean, typed interfaces consumed by the core layer.
"""

from termshell.infra.line_sources import PromptToolkitLineSource, StreamLineSource
from termshell.infra.screen import clear_screen
from termshell.infra.signals import InterruptHook, interrupt_hook

__all__: list[str] = [
    "InterruptHook",
    "PromptToolkitLineSource",
    "StreamLineSource",
    "clear_screen",
    "interrupt_hook",
]
