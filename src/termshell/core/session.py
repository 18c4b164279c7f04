"""Terminal session controller.

:class:`TerminalSession` owns the interactive loop and every
session-lifetime side effect.  It records each received line, invokes
the input handler, routes the rendered result through the
:class:`~termshell.core.sink.OutputRouter` and redraws the prompt.

Lifecycle
---------
``IDLE`` → ``RUNNING`` ⇄ ``INTERRUPTED`` → ``CLOSED``

* Construction has no side effects: the screen is cleared and the
  Ctrl+C hook attached by :meth:`TerminalSession.start`.
* ``INTERRUPTED`` is not a lock.  Input keeps working and the next
  processed line returns the session to ``RUNNING``.
* ``CLOSED`` is terminal.  The exit message is written exactly once,
  whether the user or the host closed the session.

Processing is single-threaded: one line is fully handled (handler,
writes, prompt redraw) before the next event is dispatched.  A Ctrl+C
signal that arrives while a line is being processed is held until the
line's output is complete and then replaces the plain prompt redraw.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from termshell.core.formatter import format_result
from termshell.core.handler_runner import ErrorPolicy, HandlerRunner
from termshell.core.models import (
    DEFAULT_USER,
    DEFAULT_WORKING_DIRECTORY,
    EXIT_MESSAGE,
    INTERRUPT_NOTICE,
    SCREEN_CLEAR_ERROR,
    WRAP_WIDTH,
    SessionStatus,
)
from termshell.core.protocols import InputHandler, LineSource, OutputSink, ScreenClearer
from termshell.core.sink import OutputRouter
from termshell.core.state import SessionState
from termshell.exceptions import SessionClosedError, SessionStateError

if TYPE_CHECKING:
    from termshell.config import Settings
    from termshell.infra.signals import InterruptHook

_ACTIVE: frozenset[SessionStatus] = frozenset({SessionStatus.RUNNING, SessionStatus.INTERRUPTED})


class TerminalSession:
    """Prompt-driven terminal surface around an input handler.

    Parameters
    ----------
    user:
        Name shown in the prompt.
    working_directory:
        Directory label shown in the prompt.
    input_handler:
        Callable answering each line.  Without one, lines are recorded
        in the history and produce no output.
    line_source:
        Host line reader.  Defaults to an interactive
        :class:`~termshell.infra.line_sources.PromptToolkitLineSource`.
    clear_screen:
        Screen-clear service.  Defaults to the platform clear command.
    interrupt_hook:
        Ctrl+C dispatcher.  Defaults to the process-wide shared hook.
    handler_timeout:
        Seconds before a handler call is reported as timed out.
    handler_errors:
        ``"report"`` renders handler exceptions on the error channel,
        ``"raise"`` lets them propagate out of :meth:`handle_input`.
    wrap_width:
        Column width for structured results.
    clear_on_start:
        Whether :meth:`start` clears the screen.
    """

    def __init__(
        self,
        user: str = DEFAULT_USER,
        working_directory: str = DEFAULT_WORKING_DIRECTORY,
        input_handler: InputHandler | None = None,
        *,
        line_source: LineSource | None = None,
        clear_screen: ScreenClearer | None = None,
        interrupt_hook: InterruptHook | None = None,
        handler_timeout: float | None = None,
        handler_errors: ErrorPolicy = "report",
        wrap_width: int = WRAP_WIDTH,
        clear_on_start: bool = True,
    ) -> None:
        if wrap_width < 1:
            raise ValueError(f"wrap_width must be at least 1, got {wrap_width}")
        self._state = SessionState(user=user, working_directory=working_directory)
        self._router = OutputRouter()
        self._runner: HandlerRunner | None = None
        if input_handler is not None:
            self._runner = HandlerRunner(
                input_handler,
                timeout=handler_timeout,
                errors=handler_errors,
            )
        self._line_source = line_source if line_source is not None else _default_line_source()
        self._clear_screen = clear_screen if clear_screen is not None else _default_clear_screen()
        self._interrupt_hook = (
            interrupt_hook if interrupt_hook is not None else _default_interrupt_hook()
        )
        self._wrap_width = wrap_width
        self._clear_on_start = clear_on_start
        self._status = SessionStatus.IDLE
        self._exiting = False
        self._processing = False
        self._interrupt_pending = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        input_handler: InputHandler | None = None,
        **kwargs: Any,
    ) -> TerminalSession:
        """Build a session from :class:`~termshell.config.Settings`.

        Keyword arguments are passed through to the constructor and win
        over the settings.
        """
        options: dict[str, Any] = {
            "handler_timeout": settings.handler_timeout,
            "handler_errors": settings.handler_errors,
            "wrap_width": settings.wrap_width,
            "clear_on_start": settings.clear_on_start,
        }
        options.update(kwargs)
        return cls(settings.user, settings.working_directory, input_handler, **options)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def user(self) -> str:
        return self._state.user

    @property
    def working_directory(self) -> str:
        return self._state.working_directory

    @property
    def history(self) -> tuple[str, ...]:
        """Snapshot of the lines received since start or the last clear."""
        return tuple(self._state.history)

    @property
    def prompt(self) -> str:
        """The prompt as it would be drawn right now."""
        return self._state.prompt

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def line_source(self) -> LineSource:
        return self._line_source

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin the session: clear the screen, hook Ctrl+C, draw the prompt.

        Raises
        ------
        SessionClosedError
            When the session has already been closed.
        """
        if self._status is SessionStatus.CLOSED:
            raise SessionClosedError("Cannot start a closed session.")
        if self._status is not SessionStatus.IDLE:
            logger.warning("session.start ignored: already {}", self._status.value)
            return

        if self._clear_on_start:
            self._clear()
        self.attach()
        self._line_source.on_line(self._on_line)
        self._line_source.on_close(self._on_close)
        self._line_source.on_interrupt(self.handle_interrupt)
        self._status = SessionStatus.RUNNING
        logger.debug(
            "session.start user={} cwd={}",
            self._state.user,
            self._state.working_directory,
        )
        self._draw_prompt()

    def run(self) -> None:
        """Start the session and block until it is closed."""
        self.start()
        self._line_source.run()

    def exit(self) -> None:
        """Close the session gracefully.

        Writes the exit message, tells the line source to close and
        releases the Ctrl+C hook.  Calling it again has no effect.
        """
        if self._status is SessionStatus.CLOSED or self._exiting:
            return
        self._exiting = True
        try:
            self._router.write_output(EXIT_MESSAGE)
            self._line_source.close()
        finally:
            self.detach()
            if self._runner is not None:
                self._runner.close()
            self._status = SessionStatus.CLOSED
            self._exiting = False
        logger.debug("session.closed history={}", len(self._state.history))

    def attach(self) -> None:
        """Deliver Ctrl+C signals to :meth:`handle_interrupt` (idempotent)."""
        self._interrupt_hook.attach(self.handle_interrupt)

    def detach(self) -> None:
        """Stop receiving Ctrl+C signals (idempotent)."""
        self._interrupt_hook.detach(self.handle_interrupt)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_input(self, line: str) -> None:
        """Process one received line.

        The line is recorded, passed to the handler and its result
        rendered; the prompt is then redrawn once.

        Raises
        ------
        SessionStateError
            When the session has not been started.
        SessionClosedError
            When the session is closed.
        """
        self._require_active()
        self._state.record(line)
        logger.debug("session.input line={!r}", line)

        self._interrupt_pending = False
        self._processing = True
        try:
            if self._runner is not None:
                rendered = format_result(self._runner(line), width=self._wrap_width)
                if rendered is not None:
                    for text in rendered.lines:
                        self._router.write(rendered.channel, text)
        finally:
            self._processing = False

        if self._status is SessionStatus.CLOSED:
            return
        if self._interrupt_pending:
            self._interrupt_pending = False
            self.handle_interrupt()
            return
        self._state.interrupted = False
        self._status = SessionStatus.RUNNING
        self._draw_prompt()

    def handle_interrupt(self) -> None:
        """React to Ctrl+C: print the exit hint and annotate the prompt.

        While a line is being processed the interrupt is only recorded;
        it is acted on after the line's output has been written.
        """
        if self._status not in _ACTIVE or self._exiting:
            logger.debug("session.interrupt ignored: {}", self._status.value)
            return
        if self._processing:
            self._interrupt_pending = True
            return
        self._line_source.write("\n")
        self._router.write_output(INTERRUPT_NOTICE)
        self._state.interrupted = True
        self._status = SessionStatus.INTERRUPTED
        self._draw_prompt()

    # ------------------------------------------------------------------
    # Session operations
    # ------------------------------------------------------------------

    def clear_terminal(self) -> None:
        """Clear the screen, forget the history and redraw the prompt.

        Raises
        ------
        SessionClosedError
            When the session is closed.
        """
        if self._status is SessionStatus.CLOSED:
            raise SessionClosedError("Cannot clear a closed session.")
        self._clear()
        self._state.clear_history()
        self._state.interrupted = False
        self._redraw()

    def set_user(self, name: str) -> None:
        """Change the user shown in the prompt."""
        self._state.user = name
        self._redraw()

    def set_current_directory(self, path: str) -> None:
        """Change the working-directory label shown in the prompt."""
        self._state.working_directory = path
        self._redraw()

    def subscribe_output(self, sink: OutputSink) -> None:
        """Send output-class messages to *sink* instead of ``sys.stdout``."""
        self._router.subscribe_output(sink)

    def subscribe_error(self, sink: OutputSink) -> None:
        """Send error-class messages to *sink* instead of ``sys.stderr``."""
        self._router.subscribe_error(sink)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _on_line(self, line: str) -> None:
        self.handle_input(line)

    def _on_close(self) -> None:
        if self._status is SessionStatus.CLOSED or self._exiting:
            return
        logger.debug("session.host_closed")
        self.exit()

    def _require_active(self) -> None:
        if self._status is SessionStatus.CLOSED:
            raise SessionClosedError("Session is closed.")
        if self._status not in _ACTIVE:
            raise SessionStateError(
                "Session is not running.",
                hint="Call start() before feeding input.",
            )

    def _clear(self) -> None:
        try:
            self._clear_screen()
        except Exception as exc:  # noqa: BLE001
            logger.opt(exception=exc).debug("session.clear_screen failed")
            self._router.write_error(SCREEN_CLEAR_ERROR.format(detail=exc))

    def _redraw(self) -> None:
        # handle_input redraws once the line is done.
        if self._status is not SessionStatus.CLOSED and not self._processing:
            self._draw_prompt()

    def _draw_prompt(self) -> None:
        self._line_source.prompt(self._state.prompt)


# ---------------------------------------------------------------------------
# Default collaborators
# ---------------------------------------------------------------------------

def _default_line_source() -> LineSource:
    from termshell.infra.line_sources import PromptToolkitLineSource

    return PromptToolkitLineSource()


def _default_clear_screen() -> ScreenClearer:
    from termshell.infra.screen import clear_screen

    return clear_screen


def _default_interrupt_hook() -> InterruptHook:
    from termshell.infra.signals import interrupt_hook

    return interrupt_hook
