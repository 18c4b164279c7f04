"""Output routing between subscribed sinks and the process streams.

An :class:`OutputRouter` holds two independent optional bindings, one
for output-class messages and one for error-class messages.  When a
binding is absent the write falls back to ``sys.stdout`` /
``sys.stderr``.  The fallback stream is looked up on every write, so a
binding made after construction — or a stream swapped by a test
harness — takes effect for the very next write.
"""

from __future__ import annotations

import io
import sys
from typing import Any

from termshell.core.models import Channel
from termshell.core.protocols import OutputSink


class OutputRouter:
    """Writes newline-terminated messages to the right destination.

    Subscribing replaces any previous binding for that channel.
    Unbinding is not supported: a session has at most one consumer per
    channel.  Sinks are treated as append-only and are never read from
    or closed.
    """

    def __init__(self) -> None:
        self._output: OutputSink | None = None
        self._error: OutputSink | None = None

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def subscribe_output(self, sink: OutputSink) -> None:
        """Route output-class messages to *sink*."""
        self._output = sink

    def subscribe_error(self, sink: OutputSink) -> None:
        """Route error-class messages to *sink*."""
        self._error = sink

    @property
    def output_sink(self) -> OutputSink | None:
        return self._output

    @property
    def error_sink(self) -> OutputSink | None:
        return self._error

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write_output(self, text: str) -> None:
        """Write ``text + "\\n"`` to the output sink or ``sys.stdout``."""
        self._write(self._output, sys.stdout, text)

    def write_error(self, text: str) -> None:
        """Write ``text + "\\n"`` to the error sink or ``sys.stderr``."""
        self._write(self._error, sys.stderr, text)

    def write(self, channel: Channel, text: str) -> None:
        """Write *text* to the destination for *channel*."""
        if channel is Channel.ERROR:
            self.write_error(text)
        else:
            self.write_output(text)

    @staticmethod
    def _write(sink: OutputSink | None, default: Any, text: str) -> None:
        message = f"{text}\n"
        if sink is not None:
            if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
                sink.write(message.encode("utf-8"))
            else:
                sink.write(message)
            return
        default.write(message)
        default.flush()
