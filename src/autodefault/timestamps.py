"""Timestamp parsing with optional custom layouts.

Without a layout, text is read as RFC 3339 (``2025-01-10T17:20:00Z``).

A layout is either

* a :func:`~datetime.datetime.strptime` format, recognised by a ``%``, or
* a *reference layout*: the reference time ``Mon Jan 2 15:04:05 MST 2006``
  written the way the value is written, e.g. ``Mon, 02 Jan 2006 15:04:05 MST``
  for RFC 1123 text. Reference layouts are translated to strptime directives.

Parsed values without zone information are returned in UTC.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, timezone

__all__ = [
    "RFC1123",
    "RFC3339",
    "is_zero_timestamp",
    "parse_timestamp",
    "translate_layout",
]

RFC3339 = "2006-01-02T15:04:05Z07:00"
RFC1123 = "Mon, 02 Jan 2006 15:04:05 MST"

# Longest tokens first: the regex alternation takes the first that matches.
_LAYOUT_DIRECTIVES: dict[str, str] = {
    "January": "%B",
    "Monday": "%A",
    "Jan": "%b",
    "Mon": "%a",
    "MST": "%Z",
    "2006": "%Y",
    "Z07:00": "%z",
    "Z0700": "%z",
    "-07:00": "%z",
    "-0700": "%z",
    "002": "%j",
    "01": "%m",
    "02": "%d",
    "_2": "%d",
    "03": "%I",
    "04": "%M",
    "05": "%S",
    "06": "%y",
    "15": "%H",
    "PM": "%p",
    "pm": "%p",
    "1": "%m",
    "2": "%d",
    "3": "%I",
    "4": "%M",
    "5": "%S",
}

_FRACTION = r"[.,](?:0+|9+)(?![0-9])"

_LAYOUT_TOKEN = re.compile(
    "|".join([_FRACTION, *(re.escape(token) for token in _LAYOUT_DIRECTIVES)])
)

# Zone abbreviations as Go's MST token accepts them.
_ZONE_ABBREVIATION = re.compile(r"(?<![A-Za-z])[A-Z]{3,5}(?![A-Za-z])")

# strptime's %f reads at most six digits.
_SUBMICROSECOND_DIGITS = re.compile(r"(?<=[.,])([0-9]{6})[0-9]+")

_UTC_NAMES = frozenset({"UTC", "GMT"})


def _translate(layout: str) -> tuple[str, str | None]:
    """Return (strptime format, optional fractional directive or None)."""
    if "%" in layout:
        return layout, None

    optional: str | None = None

    def _directive(match: re.Match[str]) -> str:
        nonlocal optional
        token = match.group(0)
        if token in _LAYOUT_DIRECTIVES:
            return _LAYOUT_DIRECTIVES[token]
        directive = f"{token[0]}%f"
        if token[1] == "9":
            optional = directive
        return directive

    return _LAYOUT_TOKEN.sub(_directive, layout), optional


def translate_layout(layout: str) -> str:
    """Translate a reference layout to a strptime format.

    Layouts that already contain ``%`` are returned unchanged. Fractional
    seconds (``.000`` or ``.999``, any number of digits) become ``%f``, which
    reads one to six digits; longer fractions are cut to microseconds when
    parsing.

    Example:
        >>> translate_layout("Mon, 02 Jan 2006 15:04:05 MST")
        '%a, %d %b %Y %H:%M:%S %Z'
    """
    return _translate(layout)[0]


def _strptime(text: str, fmt: str) -> datetime:
    if "%f" in fmt:
        text = _SUBMICROSECOND_DIGITS.sub(r"\1", text)
    if "%Z" not in fmt:
        return datetime.strptime(text, fmt)

    # %Z only knows UTC, GMT and the local zone names: match the
    # abbreviation literally and give it a zero offset.
    for match in _ZONE_ABBREVIATION.finditer(text):
        name = match.group(0)
        try:
            parsed = datetime.strptime(text, fmt.replace("%Z", name, 1))
        except ValueError:
            continue
        zone = UTC if name in _UTC_NAMES else timezone(timedelta(0), name)
        return parsed.replace(tzinfo=zone)
    msg = f"time data {text!r} does not match format {fmt!r}"
    raise ValueError(msg)


def parse_timestamp(text: str, layout: str | None = None) -> datetime:
    """Parse a timestamp.

    Args:
        text: Timestamp text.
        layout: Optional reference layout or strptime format. RFC 3339 when
            omitted.

    Returns:
        A timezone-aware datetime. Zone abbreviations other than UTC and GMT
        get a zero offset under their own name.

    Raises:
        ValueError: If the text does not match the layout.
    """
    if layout is None or layout == RFC3339:
        parsed = datetime.fromisoformat(text)
    else:
        fmt, optional = _translate(layout)
        try:
            parsed = _strptime(text, fmt)
        except ValueError:
            if optional is None:
                raise
            parsed = _strptime(text, fmt.replace(optional, "", 1))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def is_zero_timestamp(value: datetime | None) -> bool:
    """True for None and for ``datetime.min`` (naive or aware)."""
    if value is None:
        return True
    return value.replace(tzinfo=None) == datetime.min
