"""Protocols (interfaces) consumed by the core layer.

These define the contracts that collaborators must satisfy.  Core code
depends ONLY on these protocols — never on concrete adapters — so a
session can be driven by a real terminal, a pipe, or a test fake.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


InputHandler = Callable[[str], Any]
"""Callable answering one input line.

It returns a ``str`` (text), a mapping or dataclass (structured), an
exception instance (failure), ``None`` (no output), or an awaitable
resolving to one of these.
"""

ScreenClearer = Callable[[], None]
"""Fire-and-forget call that clears the visible screen.

Failures are raised as exceptions; the session reports them and
carries on.
"""


@runtime_checkable
class OutputSink(Protocol):
    """Append-only consumer of rendered text.

    Text streams (``sys.stdout``, ``io.StringIO``, open files) satisfy
    this protocol structurally.  The session never reads from or closes
    a sink.
    """

    def write(self, text: Any, /) -> Any:
        """Append *text* to the sink."""
        ...  # pragma: no cover


class LineSource(Protocol):
    """Contract for the host mechanism that reads input lines.

    A line source owns line editing and history recall.  It reports
    what the user did through the registered callbacks and draws the
    prompt it is given.
    """

    def on_line(self, callback: Callable[[str], None]) -> None:
        """Register *callback* for every received line (without newline)."""
        ...  # pragma: no cover

    def on_close(self, callback: Callable[[], None]) -> None:
        """Register *callback* for end of input or an explicit close."""
        ...  # pragma: no cover

    def on_interrupt(self, callback: Callable[[], None]) -> None:
        """Register *callback* for Ctrl+C pressed while editing a line."""
        ...  # pragma: no cover

    def prompt(self, text: str) -> None:
        """Draw *text* as the prompt for the next input opportunity."""
        ...  # pragma: no cover

    def write(self, text: str) -> None:
        """Write raw *text* to the terminal, bypassing the sinks."""
        ...  # pragma: no cover

    def close(self) -> None:
        """Stop reading input and fire the close callbacks once."""
        ...  # pragma: no cover

    def run(self) -> None:
        """Block, dispatching events until the source is closed."""
        ...  # pragma: no cover
