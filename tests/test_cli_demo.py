"""Tests for the demo input handler (cli/demo.py)."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from conftest import FakeLineSource, RecordingSink
from termshell.cli.demo import SAMPLE_OBJECT, DemoHandler
from termshell.core.models import EXIT_MESSAGE, SessionStatus
from termshell.core.session import TerminalSession


@pytest.fixture
def demo(make_session: Callable[..., TerminalSession]) -> DemoHandler:
    handler = DemoHandler()
    session = make_session(handler)
    handler.bind(session)
    session.start()
    return handler


class TestUnbound:
    def test_echo_needs_no_session(self) -> None:
        assert DemoHandler()("hello") == "You typed: hello"

    def test_session_commands_need_binding(self) -> None:
        with pytest.raises(RuntimeError, match="not bound"):
            DemoHandler()("whoami")


class TestResults:
    def test_blank_line_is_silent(self, demo: DemoHandler) -> None:
        assert demo("   ") is None

    def test_object(self, demo: DemoHandler) -> None:
        result = demo("object")
        assert result == SAMPLE_OBJECT
        assert result is not SAMPLE_OBJECT

    @pytest.mark.parametrize("line", ["error", "error please", "errors"])
    def test_error(self, demo: DemoHandler, line: str) -> None:
        result = demo(line)
        assert isinstance(result, RuntimeError)
        assert str(result) == "This is an error message."

    def test_echo_keeps_raw_line(self, demo: DemoHandler) -> None:
        assert demo("  spaced out ") == "You typed:   spaced out "


class TestIdentity:
    def test_whoami_and_pwd(self, demo: DemoHandler) -> None:
        assert demo("whoami") == "user"
        assert demo("pwd") == "/home/user"

    def test_su_changes_prompt(self, demo: DemoHandler, line_source: FakeLineSource) -> None:
        assert demo("su alice") is None
        assert demo.session.user == "alice"
        assert line_source.prompts[-1] == "alice@server:/home/user$ "

    def test_su_without_name(self, demo: DemoHandler) -> None:
        result = demo("su")
        assert isinstance(result, ValueError)
        assert str(result) == "usage: su NAME"

    def test_cd(self, demo: DemoHandler) -> None:
        demo("cd /var/log")
        assert demo.session.working_directory == "/var/log"
        demo("cd")
        assert demo.session.working_directory == "/"


class TestSessionCommands:
    def test_history_numbered(self, demo: DemoHandler) -> None:
        demo.session.handle_input("first")
        demo.session.handle_input("second")
        assert demo("history") == "   1  first\n   2  second"

    def test_clear(self, demo: DemoHandler, clearer: list[int]) -> None:
        demo.session.handle_input("first")
        cleared_before = len(clearer)
        demo("clear")
        assert len(clearer) == cleared_before + 1
        assert demo.session.history == ()

    def test_exit(self, demo: DemoHandler, stdout_sink: RecordingSink) -> None:
        demo.session.handle_input("exit")
        assert demo.session.status is SessionStatus.CLOSED
        assert stdout_sink.data == [f"{EXIT_MESSAGE}\n"]
