"""Infrastructure: line sources that feed a terminal session.

Two adapters satisfy :class:`~termshell.core.protocols.LineSource`:

* :class:`PromptToolkitLineSource` — interactive line editing and
  in-memory history through ``prompt_toolkit``.  Ctrl+C while editing
  becomes an interrupt event, Ctrl+D at an empty prompt closes.
* :class:`StreamLineSource` — reads newline-terminated lines from a
  text stream (piped stdin, a file, ``io.StringIO``); end of stream
  closes.

Both dispatch events synchronously on the thread that calls
:meth:`run`, one line at a time.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any, TextIO

from loguru import logger

from termshell.exceptions import EnvironmentError


def _import_prompt_toolkit() -> Any:
    """Import prompt_toolkit lazily for interactive line editing."""
    try:
        import prompt_toolkit
        import prompt_toolkit.patch_stdout
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "prompt_toolkit is not installed. Install with: pip install prompt-toolkit",
        ) from exc
    return prompt_toolkit


class _CallbackSource:
    """Callback registry and close bookkeeping shared by the adapters."""

    def __init__(self) -> None:
        self._line_callbacks: list[Callable[[str], None]] = []
        self._close_callbacks: list[Callable[[], None]] = []
        self._interrupt_callbacks: list[Callable[[], None]] = []
        self._prompt: str = ""
        self._closed: bool = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def on_line(self, callback: Callable[[str], None]) -> None:
        self._line_callbacks.append(callback)

    def on_close(self, callback: Callable[[], None]) -> None:
        self._close_callbacks.append(callback)

    def on_interrupt(self, callback: Callable[[], None]) -> None:
        self._interrupt_callbacks.append(callback)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current_prompt(self) -> str:
        return self._prompt

    def close(self) -> None:
        """Stop reading and fire the close callbacks (first call only)."""
        if self._closed:
            return
        self._closed = True
        for callback in list(self._close_callbacks):
            callback()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _emit_line(self, line: str) -> None:
        for callback in list(self._line_callbacks):
            callback(line)

    def _emit_interrupt(self) -> None:
        for callback in list(self._interrupt_callbacks):
            callback()


class PromptToolkitLineSource(_CallbackSource):
    """Interactive terminal input backed by ``prompt_toolkit``.

    Parameters
    ----------
    session:
        A ``PromptSession`` (or compatible object with ``prompt()``).
        Created lazily on first :meth:`run` when omitted, so merely
        constructing the source never touches the terminal.
    patch_stdout:
        Route writes made while the prompt is active above the input
        line instead of through it.
    """

    def __init__(self, session: Any = None, *, patch_stdout: bool = True) -> None:
        super().__init__()
        self._session = session
        self._patch_stdout = patch_stdout
        self._aborted = False

    def prompt(self, text: str) -> None:
        """Use *text* as the prompt of the next read."""
        self._prompt = text

    def write(self, text: str) -> None:
        """Write *text* to stdout.

        prompt_toolkit has already ended the input line when it aborts on
        Ctrl+C, so the first bare newline written after that is dropped.
        """
        if self._aborted and text == "\n":
            self._aborted = False
            return
        sys.stdout.write(text)
        sys.stdout.flush()

    def run(self) -> None:
        """Read lines until Ctrl+D or :meth:`close`."""
        if self._patch_stdout:
            patch_stdout = _import_prompt_toolkit().patch_stdout.patch_stdout
            with patch_stdout(raw=True):
                self._read_loop()
        else:
            self._read_loop()

    def _read_loop(self) -> None:
        session = self._ensure_session()
        while not self._closed:
            try:
                line = session.prompt(self._prompt)
            except KeyboardInterrupt:
                self._aborted = True
                try:
                    self._emit_interrupt()
                finally:
                    self._aborted = False
                continue
            except EOFError:
                logger.debug("line_source.eof")
                break
            self._emit_line(line)
        self.close()

    def _ensure_session(self) -> Any:
        if self._session is None:
            self._session = _import_prompt_toolkit().PromptSession()
        return self._session


class StreamLineSource(_CallbackSource):
    """Non-interactive input read line by line from a text stream.

    Parameters
    ----------
    stream:
        Stream to read.  ``None`` means ``sys.stdin`` at :meth:`run` time.
    echo:
        Optional stream that receives each drawn prompt, making piped
        transcripts look like an interactive session.
    """

    def __init__(self, stream: TextIO | None = None, *, echo: TextIO | None = None) -> None:
        super().__init__()
        self._stream = stream
        self._echo = echo

    def prompt(self, text: str) -> None:
        self._prompt = text
        if self._echo is not None:
            self._echo.write(text)
            self._echo.flush()

    def write(self, text: str) -> None:
        if self._echo is not None:
            self._echo.write(text)

    def run(self) -> None:
        """Dispatch every line of the stream, then close."""
        stream = self._stream if self._stream is not None else sys.stdin
        for raw in stream:
            if self._closed:
                break
            self._emit_line(raw.rstrip("\r\n"))
        self.close()
