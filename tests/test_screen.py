"""Tests for platform screen clearing (infra/screen.py)."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock

import pytest

from termshell.exceptions import ScreenClearError
from termshell.infra import screen


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    run = MagicMock(return_value=subprocess.CompletedProcess(["clear"], 0))
    monkeypatch.setattr(screen.subprocess, "run", run)
    return run


class TestClearCommand:
    @pytest.mark.parametrize("system", ["Linux", "Darwin"])
    def test_posix_uses_clear(self, monkeypatch: pytest.MonkeyPatch, system: str) -> None:
        monkeypatch.setattr(screen.platform, "system", lambda: system)
        assert screen.clear_command() == (["clear"], False)

    def test_windows_uses_cls_through_shell(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(screen.platform, "system", lambda: "Windows")
        assert screen.clear_command() == ("cls", True)


class TestClearScreen:
    def test_runs_command(self, monkeypatch: pytest.MonkeyPatch, fake_run: MagicMock) -> None:
        monkeypatch.setattr(screen.platform, "system", lambda: "Linux")
        screen.clear_screen()
        fake_run.assert_called_once_with(["clear"], shell=False, check=True)

    def test_non_zero_exit_raises(self, fake_run: MagicMock) -> None:
        fake_run.side_effect = subprocess.CalledProcessError(3, ["clear"])
        with pytest.raises(ScreenClearError, match="exited with status 3"):
            screen.clear_screen()

    def test_missing_command_raises_with_hint(self, fake_run: MagicMock) -> None:
        fake_run.side_effect = FileNotFoundError(2, "No such file", "clear")
        with pytest.raises(ScreenClearError, match="could not be run") as exc_info:
            screen.clear_screen()
        assert exc_info.value.hint is not None
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
