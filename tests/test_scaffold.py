"""Smoke tests: package wiring, exception hierarchy and CLI entry points."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from termshell import TerminalSession, __version__
from termshell.cli import app as app_module
from termshell.cli import exit_codes
from termshell.cli.app import cli, main
from termshell.core.models import EXIT_MESSAGE
from termshell.exceptions import (
    ConfigurationError,
    EnvironmentError,
    HandlerError,
    HandlerTimeoutError,
    ScreenClearError,
    SessionClosedError,
    SessionStateError,
    TermShellError,
)


@pytest.fixture
def piped_stdin(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run the CLI against piped input with logging left untouched."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TERMSHELL_USER", raising=False)
    monkeypatch.setattr("termshell.logging_utils.configure_logging", lambda level: None)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)

    def test_session_exported(self) -> None:
        assert TerminalSession.__name__ == "TerminalSession"


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            SessionStateError,
            SessionClosedError,
            HandlerError,
            HandlerTimeoutError,
            ScreenClearError,
            ConfigurationError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[TermShellError]
    ) -> None:
        assert issubclass(exc_class, TermShellError)

    def test_closed_is_a_state_error(self) -> None:
        assert issubclass(SessionClosedError, SessionStateError)

    def test_timeout_is_a_handler_error(self) -> None:
        assert issubclass(HandlerTimeoutError, HandlerError)

    def test_hint_is_stored(self) -> None:
        err = TermShellError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert TermShellError("boom").hint is None


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------

class TestMain:
    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_piped_session(
        self,
        piped_stdin: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("hello\nwhoami\nexit\nignored\n"))
        code = main(["--user", "alice"])
        assert code == exit_codes.SUCCESS
        out = capsys.readouterr().out
        assert out == f"You typed: hello\nalice\n{EXIT_MESSAGE}\n"

    def test_invalid_option_value(self, piped_stdin: None) -> None:
        with pytest.raises(ConfigurationError):
            main(["--timeout", "-1"])


# ---------------------------------------------------------------------------
# cli() error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    @pytest.mark.parametrize(
        ("raised", "expected"),
        [
            (ConfigurationError("bad", hint="fix it"), exit_codes.GENERAL_ERROR),
            (KeyboardInterrupt(), exit_codes.KEYBOARD_INTERRUPT),
            (RuntimeError("surprise"), exit_codes.UNEXPECTED_ERROR),
        ],
    )
    def test_exceptions_mapped_to_exit_codes(
        self,
        monkeypatch: pytest.MonkeyPatch,
        raised: BaseException,
        expected: int,
    ) -> None:
        def failing_main() -> int:
            raise raised

        monkeypatch.setattr(app_module, "main", failing_main)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == expected

    def test_success_exit_code(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "main", lambda: exit_codes.SUCCESS)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.SUCCESS
