"""Built-in parsers for scalar field types.

Used by the walker when no converter claimed a field and the field is not a
nested record. Supported targets are ``str``, ``bool``, ``int``, ``float``
(and their subclasses) and :class:`enum.Enum` subclasses.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum
from functools import partial
from typing import Any, get_origin

__all__ = ["scalar_parser"]

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Plain ASCII literals only: no surrounding whitespace, no "_" separators.
_INT_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _parse_bool(text: str) -> bool:
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    msg = f"invalid boolean literal {text!r}"
    raise ValueError(msg)


def _strict_int(text: str) -> int:
    if _INT_LITERAL.fullmatch(text) is None:
        msg = f"invalid integer literal {text!r}"
        raise ValueError(msg)
    return int(text, 10)


def _parse_int(target: type[int], text: str) -> int:
    value = _strict_int(text)
    return value if target is int else target(value)


def _parse_float(target: type[float], text: str) -> float:
    if _FLOAT_LITERAL.fullmatch(text) is None:
        msg = f"invalid float literal {text!r}"
        raise ValueError(msg)
    value = float(text)
    return value if target is float else target(value)


def _parse_str(target: type[str], text: str) -> str:
    return text if target is str else target(text)


def _parse_enum(target: type[Enum], text: str) -> Enum:
    # Member value first, then member name.
    try:
        return target(_strict_int(text) if issubclass(target, int) else text)
    except ValueError:
        if text in target.__members__:
            return target[text]
        raise


def scalar_parser(target: Any) -> Callable[[str], Any] | None:
    """Return the text parser for a scalar target type.

    Args:
        target: The field's declared type with Optional stripped.

    Returns:
        A callable that turns annotation text into a value of ``target`` and
        raises ``ValueError`` on malformed text, or None if ``target`` is not
        a supported scalar type.
    """
    if not isinstance(target, type) or get_origin(target) is not None:
        return None
    # Enum before int/str: IntEnum and StrEnum subclass both.
    if issubclass(target, Enum):
        return partial(_parse_enum, target)
    if issubclass(target, bool):
        return _parse_bool
    if issubclass(target, int):
        return partial(_parse_int, target)
    if issubclass(target, float):
        return partial(_parse_float, target)
    if issubclass(target, str):
        return partial(_parse_str, target)
    return None
