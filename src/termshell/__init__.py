"""termshell — prompt-driven terminal surface for interactive CLI tools.

Forwards each input line to an external handler and renders the result
on standard output or standard error.  The package owns no command
semantics of its own.
"""

from loguru import logger

from termshell.core.session import TerminalSession
from termshell.version import __version__

logger.disable("termshell")

__all__: list[str] = ["TerminalSession", "__version__"]
