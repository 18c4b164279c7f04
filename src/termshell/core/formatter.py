"""Result classification and rendering.

Maps the value returned by an input handler to a
:class:`~termshell.core.models.RenderedOutput` — the lines to write and
the channel to write them to.  Deterministic and side-effect free.

Classification order
--------------------
1. Exception instance → failure, error channel.
2. Mapping or dataclass instance → indented JSON, wrapped, output channel.
3. ``str`` → verbatim, output channel.
4. Anything else → nothing is written.

A structured value that cannot be serialised for any reason becomes a
single error-channel line instead of an exception.

The failure check comes first so that an exception type which also
implements the mapping interface is still reported as an error.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from typing import Any

from loguru import logger

from termshell.core.models import WRAP_WIDTH, Channel, RenderedOutput, ResultKind
from termshell.core.text_wrap import wrap_text

JSON_INDENT: int = 2


def classify_result(value: object) -> ResultKind:
    """Return the :class:`ResultKind` of a handler return value."""
    if isinstance(value, BaseException):
        return ResultKind.FAILURE
    if isinstance(value, Mapping) or _is_dataclass_instance(value):
        return ResultKind.STRUCTURED
    if isinstance(value, str):
        return ResultKind.TEXT
    return ResultKind.EMPTY


def format_result(value: object, *, width: int = WRAP_WIDTH) -> RenderedOutput | None:
    """Render *value* for display.

    Parameters
    ----------
    value:
        Whatever the input handler returned.
    width:
        Column width applied to structured results.

    Returns
    -------
    RenderedOutput | None
        ``None`` when nothing should be written.
    """
    kind = classify_result(value)

    if kind is ResultKind.FAILURE:
        return RenderedOutput(Channel.ERROR, (str(value),))

    if kind is ResultKind.STRUCTURED:
        try:
            serialised = render_structured(value)
        except Exception as exc:  # noqa: BLE001
            logger.opt(exception=exc).warning(
                "formatter.render_failed type={}", type(value).__name__,
            )
            return RenderedOutput(Channel.ERROR, (f"Unable to render result: {exc}",))
        return RenderedOutput(Channel.OUTPUT, tuple(wrap_text(serialised, width)))

    if kind is ResultKind.TEXT:
        return RenderedOutput(Channel.OUTPUT, (str(value),))

    if value is not None:
        logger.debug("formatter.ignored type={}", type(value).__name__)
    return None


def render_structured(value: Any) -> str:
    """Serialise a mapping or dataclass as 2-space indented JSON.

    Values JSON cannot represent natively are rendered with ``str()``.

    Raises
    ------
    TypeError
        When a key cannot be used as a JSON object key.
    ValueError
        When the value contains a circular reference.
    """
    return json.dumps(
        _jsonable(value),
        indent=JSON_INDENT,
        ensure_ascii=False,
        default=_jsonable_or_str,
    )


def _jsonable(value: Any) -> Any:
    if _is_dataclass_instance(value):
        return dataclasses.asdict(value)
    if isinstance(value, Mapping) and not isinstance(value, dict):
        return dict(value)
    return value


def _jsonable_or_str(value: Any) -> Any:
    converted = _jsonable(value)
    if converted is value:
        return str(value)
    return converted


def _is_dataclass_instance(value: object) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)
