"""Mutable per-session state and prompt derivation."""

from __future__ import annotations

from dataclasses import dataclass, field

from termshell.core.models import DEFAULT_USER, DEFAULT_WORKING_DIRECTORY, INTERRUPT_NOTICE


@dataclass(slots=True)
class SessionState:
    """User identity, directory label and input history of one session.

    ``user`` and ``working_directory`` are opaque display strings.  They
    are not validated or escaped, so a prompt built from them is not
    safe to embed where escaping matters.
    """

    user: str = DEFAULT_USER
    working_directory: str = DEFAULT_WORKING_DIRECTORY
    history: list[str] = field(default_factory=list)
    interrupted: bool = False
    """Whether the interrupt notice is appended to the prompt."""

    @property
    def prompt(self) -> str:
        """Prompt built from the current values; never cached."""
        location = f"{self.user}@server:{self.working_directory}"
        if self.interrupted:
            return f"{location} {INTERRUPT_NOTICE}$ "
        return f"{location}$ "

    def record(self, line: str) -> None:
        """Append a raw input line to the history."""
        self.history.append(line)

    def clear_history(self) -> None:
        self.history.clear()
