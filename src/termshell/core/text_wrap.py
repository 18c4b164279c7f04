"""Fixed-width greedy text wrapping.

Pure functions only — no I/O.
"""

from __future__ import annotations

from termshell.core.models import WRAP_WIDTH


def wrap_text(text: str, width: int = WRAP_WIDTH) -> list[str]:
    """Wrap *text* into lines of at most *width* characters.

    Rules
    -----
    * Each line takes as many characters as fit, breaking at the last
      whitespace at or before the width limit.  The whitespace
      character at the break is consumed as the separator.
    * A newline always ends the current line.
    * When the window holds no usable whitespace the line is cut hard
      at *width* characters, mid-token.
    * No other character is dropped or reordered.
    * ``""`` yields ``[""]``.

    Raises
    ------
    ValueError
        When *width* is smaller than 1.
    """
    if width < 1:
        raise ValueError(f"width must be at least 1, got {width}")
    if not text:
        return [""]

    lines: list[str] = []
    pos = 0
    end = len(text)
    while pos < end:
        window = text[pos:pos + width]

        newline = window.find("\n")
        if newline != -1:
            lines.append(window[:newline])
            pos += newline + 1
            continue

        if pos + width >= end:
            lines.append(window)
            break

        if text[pos + width].isspace():
            lines.append(window)
            pos += width + 1
            continue

        cut = _last_space(window)
        if cut > 0:
            lines.append(window[:cut])
            pos += cut + 1
        else:
            lines.append(window)
            pos += width

    return lines


def _last_space(window: str) -> int:
    """Index of the last whitespace in *window* past position 0, or ``-1``."""
    for index in range(len(window) - 1, 0, -1):
        if window[index].isspace():
            return index
    return -1
