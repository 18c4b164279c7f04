"""Domain models and protocol strings for termshell.

Value objects are **frozen** dataclasses with no behaviour beyond data
access.  The literal strings below are part of the visible protocol of
a session; tooling and tests match them exactly.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Protocol strings and defaults
# ---------------------------------------------------------------------------

DEFAULT_USER: str = "guest"
"""User shown in the prompt when none is given."""

DEFAULT_WORKING_DIRECTORY: str = "/"
"""Working-directory label shown in the prompt when none is given."""

WRAP_WIDTH: int = 80
"""Column width used when rendering structured results."""

EXIT_MESSAGE: str = "Exiting terminal emulator..."
"""Written to the output channel exactly once when a session closes."""

INTERRUPT_NOTICE: str = "(Press Ctrl+D to exit)"
"""Written to the output channel and appended to the prompt on Ctrl+C."""

SCREEN_CLEAR_ERROR: str = "Error clearing screen: {detail}"
"""Error-channel template used when the screen cannot be cleared."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Channel(enum.Enum):
    """Destination class of a rendered line."""

    OUTPUT = "output"
    ERROR = "error"


class ResultKind(enum.Enum):
    """Classification of a value returned by the input handler."""

    FAILURE = "failure"
    STRUCTURED = "structured"
    TEXT = "text"
    EMPTY = "empty"


class SessionStatus(enum.Enum):
    """Lifecycle state of a :class:`~termshell.core.session.TerminalSession`."""

    IDLE = "idle"
    RUNNING = "running"
    INTERRUPTED = "interrupted"
    CLOSED = "closed"


# ---------------------------------------------------------------------------
# Rendered output
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RenderedOutput:
    """Lines produced from one handler result, bound for one channel.

    Each entry in :attr:`lines` is written separately and receives its
    own trailing newline.
    """

    channel: Channel
    """Channel the lines are written to."""

    lines: tuple[str, ...]
    """Rendered lines, without trailing newlines."""

    def __len__(self) -> int:
        return len(self.lines)
