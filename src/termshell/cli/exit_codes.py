"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — the session closed normally."""

GENERAL_ERROR: int = 1
"""A known TermShellError was caught. User-facing message was displayed."""

KEYBOARD_INTERRUPT: int = 130
"""Ctrl+C escaped the session.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception — e.g. from a handler run with ``raise`` policy."""
