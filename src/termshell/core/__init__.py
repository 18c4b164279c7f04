"""Core layer — the session/output engine.

Rules
-----
* No direct terminal, subprocess or signal access; collaborators are
  injected through :mod:`termshell.core.protocols`.  Default adapters
  from ``infra`` are imported lazily, only when none is injected.
* No imports from ``cli``.
* Formatting and wrapping are pure and deterministic.
"""

from termshell.core.formatter import classify_result, format_result
from termshell.core.handler_runner import HandlerRunner
from termshell.core.models import Channel, RenderedOutput, ResultKind, SessionStatus
from termshell.core.protocols import InputHandler, LineSource, OutputSink, ScreenClearer
from termshell.core.session import TerminalSession
from termshell.core.sink import OutputRouter
from termshell.core.state import SessionState
from termshell.core.text_wrap import wrap_text

__all__: list[str] = [
    "Channel",
    "HandlerRunner",
    "InputHandler",
    "LineSource",
    "OutputRouter",
    "OutputSink",
    "RenderedOutput",
    "ResultKind",
    "ScreenClearer",
    "SessionState",
    "SessionStatus",
    "TerminalSession",
    "classify_result",
    "format_result",
    "wrap_text",
]
