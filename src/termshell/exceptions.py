"""Custom exception hierarchy for termshell.

All exceptions raised by termshell itself inherit from
:class:`TermShellError`.  Raw exceptions from collaborators (the
screen-clear subprocess, the input handler) are caught at the seam and
re-raised or reported as a typed subclass defined here.

Hierarchy
---------
TermShellError
├── SessionStateError
│   └── SessionClosedError
├── HandlerError
│   └── HandlerTimeoutError
├── ScreenClearError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class TermShellError(Exception):
    """Base exception for all termshell errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Session lifecycle -----------------------------------------------------

class SessionStateError(TermShellError):
    """Raised when an operation is not valid in the current session state."""


class SessionClosedError(SessionStateError):
    """Raised when an operation is attempted on a closed session."""


# --- Input handler ---------------------------------------------------------

class HandlerError(TermShellError):
    """An input-handler exception converted into a reportable failure."""


class HandlerTimeoutError(HandlerError):
    """Raised when the input handler does not return within its timeout."""


# --- Environment / tooling -------------------------------------------------

class ScreenClearError(TermShellError):
    """Raised when the platform screen-clear command fails."""


class ConfigurationError(TermShellError):
    """Raised when settings cannot be loaded or validated."""


class EnvironmentError(TermShellError):
    """Raised when an optional runtime dependency is not available."""
