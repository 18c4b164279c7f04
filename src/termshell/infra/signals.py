"""Infrastructure: process-wide Ctrl+C dispatch.

``SIGINT`` handling is process-global state.  The :class:`InterruptHook`
installs one dispatcher while at least one callback is attached and
restores the previously installed handler when the last one detaches,
so several sessions — or a session started twice — never stack
duplicate handlers.

Rules
-----
* Attaching the same callback twice is a no-op.
* Signal handlers can only be installed from the main thread; attaching
  from another thread records the callback but installs nothing.
"""

from __future__ import annotations

import signal
import threading
from collections.abc import Callable
from types import FrameType
from typing import Any

from loguru import logger


class InterruptHook:
    """Reference-counted dispatcher for one signal (``SIGINT`` by default)."""

    def __init__(self, signum: int = signal.SIGINT) -> None:
        self._signum = signum
        self._callbacks: list[Callable[[], None]] = []
        self._previous: Any = None
        self._installed: bool = False

    @property
    def attached(self) -> int:
        """Number of callbacks currently attached."""
        return len(self._callbacks)

    @property
    def installed(self) -> bool:
        return self._installed

    def attach(self, callback: Callable[[], None]) -> None:
        """Deliver the signal to *callback* until it is detached."""
        if callback in self._callbacks:
            return
        self._callbacks.append(callback)
        if not self._installed:
            self._install()

    def detach(self, callback: Callable[[], None]) -> None:
        """Stop delivering the signal to *callback* (idempotent)."""
        if callback not in self._callbacks:
            return
        self._callbacks.remove(callback)
        if not self._callbacks and self._installed:
            self._uninstall()

    # ------------------------------------------------------------------
    # Signal plumbing
    # ------------------------------------------------------------------

    def _install(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            logger.debug("interrupt.install skipped: not on the main thread")
            return
        self._previous = signal.signal(self._signum, self._dispatch)
        self._installed = True
        logger.debug("interrupt.installed signum={}", self._signum)

    def _uninstall(self) -> None:
        previous = self._previous if self._previous is not None else signal.SIG_DFL
        signal.signal(self._signum, previous)
        self._previous = None
        self._installed = False
        logger.debug("interrupt.restored signum={}", self._signum)

    def _dispatch(self, _signum: int, _frame: FrameType | None) -> None:
        for callback in list(self._callbacks):
            callback()


interrupt_hook = InterruptHook()
"""Shared ``SIGINT`` hook used by sessions that are not given their own."""
