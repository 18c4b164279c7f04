"""Demo input handler used by the ``termshell`` command.

A handful of built-in commands exercise every result type the session
can render.  Anything else is echoed back.

Commands
--------
* ``object`` — a structured result with one long value.
* ``error ...`` — a failure result.
* ``whoami`` / ``pwd`` — the prompt identity.
* ``su NAME`` / ``cd PATH`` — change the prompt identity.
* ``history`` — lines received since the last clear.
* ``clear`` — clear the screen and the history.
* ``exit`` — close the session.
"""

from __future__ import annotations

from typing import Any

from termshell.core.session import TerminalSession

SAMPLE_OBJECT: dict[str, str] = {
    "key1": "value1",
    "key2": "value2",
    "key3": (
        "This is a long value that will exceed the 80 character limit "
        "and should be wrapped accordingly."
    ),
}


class DemoHandler:
    """Callable input handler bound to the session it serves.

    The handler needs the session to change the prompt or close it, so
    it is created first and bound with :meth:`bind` once the session
    exists.
    """

    def __init__(self) -> None:
        self._session: TerminalSession | None = None

    def bind(self, session: TerminalSession) -> DemoHandler:
        self._session = session
        return self

    @property
    def session(self) -> TerminalSession:
        if self._session is None:
            raise RuntimeError("DemoHandler is not bound to a session")
        return self._session

    def __call__(self, line: str) -> Any:
        command, _, argument = line.strip().partition(" ")
        argument = argument.strip()

        if not command:
            return None
        if command == "object":
            return dict(SAMPLE_OBJECT)
        if command.startswith("error"):
            return RuntimeError("This is an error message.")
        if command == "whoami":
            return self.session.user
        if command == "pwd":
            return self.session.working_directory
        if command == "su":
            if not argument:
                return ValueError("usage: su NAME")
            self.session.set_user(argument)
            return None
        if command == "cd":
            self.session.set_current_directory(argument or "/")
            return None
        if command == "history":
            return "\n".join(
                f"{index:>4}  {entry}" for index, entry in enumerate(self.session.history, 1)
            )
        if command == "clear":
            self.session.clear_terminal()
            return None
        if command == "exit":
            self.session.exit()
            return None
        return f"You typed: {line}"
