"""CLI console helpers with optional Rich support.

Messages from the error boundary go to stderr so they never mix with
session output on stdout.  Rich is imported lazily: when it is missing,
markup is stripped and the message is printed plainly.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from termshell.exceptions import EnvironmentError, TermShellError

_MARKUP = re.compile(r"\[/?[a-z ]+\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


def strip_markup(text: str) -> str:
	"""Remove simple Rich style tags such as ``[bold red]``."""
	return _MARKUP.sub("", text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*(strip_markup(str(obj)) for obj in objects), file=sys.stderr)
			return
		rich_console.print(*objects)

	def print_error(self, exc: TermShellError) -> None:
		"""Render a termshell error and its hint, if any."""
		self.print(f"[bold red]Error:[/bold red] {exc}")
		if exc.hint:
			self.print(f"[yellow]Hint:[/yellow] {exc.hint}")


console = _ConsoleProxy()
