"""Shared pytest fixtures and fakes for the termshell test suite.

Guidelines
----------
* No real terminal, subprocess or signal delivery in any test.
* The line source, screen clearer and interrupt hook are always faked
  at the protocol boundary.
* Sinks record every individual write so per-line behaviour is visible.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from termshell.core.session import TerminalSession
from termshell.infra.signals import InterruptHook


class RecordingSink:
    """Output sink that keeps each write as a separate entry."""

    def __init__(self) -> None:
        self.data: list[str] = []

    def write(self, text: str) -> int:
        self.data.append(text)
        return len(text)

    @property
    def text(self) -> str:
        return "".join(self.data)


class FakeLineSource:
    """Line source driven by the test instead of a terminal."""

    def __init__(self) -> None:
        self.prompts: list[str] = []
        self.written: list[str] = []
        self.close_calls: int = 0
        self.run_calls: int = 0
        self.line_callbacks: list[Callable[[str], None]] = []
        self.close_callbacks: list[Callable[[], None]] = []
        self.interrupt_callbacks: list[Callable[[], None]] = []

    # LineSource protocol ------------------------------------------------

    def on_line(self, callback: Callable[[str], None]) -> None:
        self.line_callbacks.append(callback)

    def on_close(self, callback: Callable[[], None]) -> None:
        self.close_callbacks.append(callback)

    def on_interrupt(self, callback: Callable[[], None]) -> None:
        self.interrupt_callbacks.append(callback)

    def prompt(self, text: str) -> None:
        self.prompts.append(text)

    def write(self, text: str) -> None:
        self.written.append(text)

    def close(self) -> None:
        self.close_calls += 1
        for callback in list(self.close_callbacks):
            callback()

    def run(self) -> None:
        self.run_calls += 1

    # Host-side events ---------------------------------------------------

    def emit_line(self, line: str) -> None:
        for callback in list(self.line_callbacks):
            callback(line)

    def emit_close(self) -> None:
        for callback in list(self.close_callbacks):
            callback()

    def emit_interrupt(self) -> None:
        for callback in list(self.interrupt_callbacks):
            callback()


class FakeInterruptHook(InterruptHook):
    """Interrupt hook that records callbacks without touching signals."""

    def _install(self) -> None:
        self._installed = True

    def _uninstall(self) -> None:
        self._installed = False

    def fire(self) -> None:
        self._dispatch(0, None)


def common_handler(line: str) -> Any:
    """Handler mirroring the interactive demo's core behaviour."""
    if line.startswith("error"):
        return RuntimeError("This is an error message.")
    if line == "object":
        return {
            "key1": "value1",
            "key2": "value2",
            "key3": (
                "This is a long value that will exceed the 80 character limit "
                "and should be wrapped accordingly by the session."
            ),
        }
    return f"You typed: {line}"


@pytest.fixture
def line_source() -> FakeLineSource:
    return FakeLineSource()


@pytest.fixture
def hook() -> FakeInterruptHook:
    return FakeInterruptHook()


@pytest.fixture
def clearer() -> list[int]:
    """Counter list appended to on every screen clear."""
    return []


@pytest.fixture
def stdout_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def stderr_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_session(
    line_source: FakeLineSource,
    hook: FakeInterruptHook,
    clearer: list[int],
    stdout_sink: RecordingSink,
    stderr_sink: RecordingSink,
) -> Callable[..., TerminalSession]:
    """Factory for sessions wired to the fakes and recording sinks."""

    def factory(handler: Any = common_handler, **kwargs: Any) -> TerminalSession:
        kwargs.setdefault("line_source", line_source)
        kwargs.setdefault("interrupt_hook", hook)
        kwargs.setdefault("clear_screen", lambda: clearer.append(1))
        session = TerminalSession("user", "/home/user", handler, **kwargs)
        session.subscribe_output(stdout_sink)
        session.subscribe_error(stderr_sink)
        return session

    return factory
