"""Compound duration strings such as ``"1s"``, ``"2h30m"`` or ``"-1.5ms"``.

A duration is an optional sign followed by one or more decimal numbers, each
with a unit suffix. Valid units are ``ns``, ``us`` (or ``µs``/``μs``), ``ms``,
``s``, ``m`` and ``h``. The bare string ``"0"`` is also accepted.

Results are :class:`datetime.timedelta` values, so anything finer than a
microsecond is rounded to the nearest microsecond.
"""

from __future__ import annotations

import re
from datetime import timedelta
from fractions import Fraction

__all__ = ["parse_duration"]

# Unit size expressed in microseconds.
_UNIT_MICROSECONDS: dict[str, Fraction] = {
    "ns": Fraction(1, 1000),
    "us": Fraction(1),
    "µs": Fraction(1),  # U+00B5 micro sign
    "μs": Fraction(1),  # U+03BC greek mu
    "ms": Fraction(1000),
    "s": Fraction(1_000_000),
    "m": Fraction(60_000_000),
    "h": Fraction(3_600_000_000),
}

_COMPONENT = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> timedelta:
    """Parse a compound duration string.

    Args:
        text: Duration text, e.g. ``"300ms"``, ``"-1.5h"``, ``"2h45m"``.

    Returns:
        The parsed duration.

    Raises:
        ValueError: If the text is empty, has a component without a unit, or
            uses an unknown unit.

    Example:
        >>> parse_duration("1h30m")
        datetime.timedelta(seconds=5400)
        >>> parse_duration("-250ms")
        datetime.timedelta(days=-1, seconds=86399, microseconds=750000)
    """
    body = text
    negative = False
    if body[:1] in ("-", "+"):
        negative = body[0] == "-"
        body = body[1:]

    if body == "0":
        return timedelta(0)
    if not body:
        msg = f"invalid duration {text!r}"
        raise ValueError(msg)

    total = Fraction(0)
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if match is None:
            msg = f"invalid duration {text!r}: unexpected {body[pos:]!r}"
            raise ValueError(msg)
        number, unit = match.groups()
        total += Fraction(number) * _UNIT_MICROSECONDS[unit]
        pos = match.end()

    micros = round(total)
    return timedelta(microseconds=-micros if negative else micros)
