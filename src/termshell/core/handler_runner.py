"""Input-handler invocation with an explicit error and timeout policy.

The runner is the only place that calls the user-supplied handler.  It
is responsible for:

* Awaiting coroutine / awaitable results.
* Enforcing the optional timeout.
* Applying the exception policy: ``"report"`` converts a raised
  exception into a :class:`~termshell.exceptions.HandlerError` value
  that the formatter renders on the error channel, ``"raise"`` lets it
  propagate.

Timeouts are always reported, never raised.  A synchronous handler
that overruns keeps its worker thread until it returns; only awaitable
handlers are actually cancelled.
"""

from __future__ import annotations

import asyncio
import inspect
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Literal

from loguru import logger

from termshell.core.protocols import InputHandler
from termshell.exceptions import HandlerError, HandlerTimeoutError

ErrorPolicy = Literal["report", "raise"]

ERROR_POLICIES: tuple[str, ...] = ("report", "raise")


class HandlerRunner:
    """Calls an :data:`InputHandler` one line at a time.

    Parameters
    ----------
    handler:
        The input handler to invoke.
    timeout:
        Seconds to wait for a result, or ``None`` to wait forever.
    errors:
        Exception policy, ``"report"`` (default) or ``"raise"``.
    """

    def __init__(
        self,
        handler: InputHandler,
        *,
        timeout: float | None = None,
        errors: ErrorPolicy = "report",
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        if errors not in ERROR_POLICIES:
            raise ValueError(f"errors must be one of {ERROR_POLICIES}, got {errors!r}")
        self._handler = handler
        self._timeout = timeout
        self._errors: ErrorPolicy = errors
        self._executor: ThreadPoolExecutor | None = None

    @property
    def timeout(self) -> float | None:
        return self._timeout

    @property
    def errors(self) -> ErrorPolicy:
        return self._errors

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def __call__(self, line: str) -> Any:
        """Invoke the handler for *line* and return its (awaited) result.

        Raises
        ------
        Exception
            Whatever the handler raised, when the policy is ``"raise"``.
        """
        try:
            return self._invoke(line)
        except HandlerTimeoutError as exc:
            logger.warning("handler.timeout line={!r} timeout={}", line, self._timeout)
            return exc
        except Exception as exc:
            if self._errors == "raise":
                raise
            logger.opt(exception=exc).warning("handler.error line={!r}", line)
            converted = HandlerError(f"{type(exc).__name__}: {exc}")
            converted.__cause__ = exc
            return converted

    def close(self) -> None:
        """Release the worker thread without waiting for an overrun handler."""
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def _invoke(self, line: str) -> Any:
        if self._timeout is None:
            result = self._handler(line)
        else:
            result = self._call_in_worker(line)
        if inspect.isawaitable(result):
            result = asyncio.run(self._await(result))
        return result

    def _call_in_worker(self, line: str) -> Any:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix="termshell-handler",
            )
        future: Future[Any] = self._executor.submit(self._handler, line)
        try:
            return future.result(timeout=self._timeout)
        except FutureTimeoutError as exc:
            # The overrun call keeps the old worker; later lines get a fresh one.
            future.cancel()
            self.close()
            raise self._timeout_error() from exc

    async def _await(self, awaitable: Any) -> Any:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            raise self._timeout_error() from exc

    def _timeout_error(self) -> HandlerTimeoutError:
        return HandlerTimeoutError(
            f"Input handler timed out after {self._timeout:g}s",
            hint="Raise the handler timeout or make the handler return sooner.",
        )
