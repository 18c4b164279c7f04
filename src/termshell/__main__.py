"""Allow ``python -m termshell`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m termshell`` behaves identically to the ``termshell``
console script.
"""

from __future__ import annotations

from termshell.cli.app import cli

if __name__ == "__main__":
    cli()
