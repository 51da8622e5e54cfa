"""Converters from annotation text to typed field values.

A converter claims a field by its target type (:meth:`Converter.accepts`) and
then produces the value to store (:meth:`Converter.convert`). Returning the
field's current value unchanged is a no-op match: the field counts as handled
and nothing is written. Malformed text is reported by raising ``ValueError``;
the registry turns it into a
:class:`~autodefault.exceptions.DefaultConversionError` naming the field.

Built-in converters, in default order:

- :class:`DurationConverter` for ``timedelta``
- :class:`TimestampConverter` for ``datetime``
- :class:`URLConverter` for ``pydantic.AnyUrl`` and its subclasses
- :class:`BytesConverter` for ``bytes`` and ``bytearray``
- :class:`TextParsableConverter` for types implementing
  :class:`ParsableFromText` and standard text-constructible value types

Example:
    A custom converter, appended to the built-ins::

        @dataclass(frozen=True, slots=True)
        class CSVConverter:
            def accepts(self, field: FieldDescriptor) -> bool:
                return field.target is tuple[str, ...]

            def convert(self, path, field, current, text):
                return tuple(text.split(","))

        fill_defaults(cfg, with_converters(*default_converters(), CSVConverter()))
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from fractions import Fraction
from ipaddress import IPv4Address, IPv6Address
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Protocol, Self, get_origin, runtime_checkable
from uuid import UUID

from pydantic import AnyUrl, TypeAdapter

from autodefault.durations import parse_duration
from autodefault.fields import split_annotation
from autodefault.timestamps import is_zero_timestamp, parse_timestamp

if TYPE_CHECKING:
    from autodefault.fields import FieldDescriptor

__all__ = [
    "TEXT_CONSTRUCTIBLE_TYPES",
    "BytesConverter",
    "Converter",
    "DurationConverter",
    "ParsableFromText",
    "TextParsableConverter",
    "TimestampConverter",
    "URLConverter",
    "default_converters",
]

HEX_PREFIX = "0x"

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")

TEXT_CONSTRUCTIBLE_TYPES: tuple[type, ...] = (
    Decimal,
    Fraction,
    UUID,
    IPv4Address,
    IPv6Address,
    PurePath,
)
"""Standard-library value types built directly from their text form."""


@runtime_checkable
class Converter(Protocol):
    """Port for turning annotation text into a value of one target type.

    The protocol is runtime_checkable so option helpers can reject objects
    that are not converters.
    """

    def accepts(self, field: FieldDescriptor) -> bool:
        """Return True if this converter handles the field's target type."""
        ...

    def convert(self, path: str, field: FieldDescriptor, current: Any, text: str) -> Any:
        """Convert annotation text for a field.

        Args:
            path: Dot-joined field path, for diagnostics.
            field: Descriptor of the field being filled.
            current: The field's current value.
            text: Raw annotation text.

        Returns:
            The value to store, or ``current`` itself to leave the field as is.

        Raises:
            ValueError: If the text cannot be converted.
        """
        ...


@runtime_checkable
class ParsableFromText(Protocol):
    """Capability of a type to build an instance from its text form.

    Any class with a ``from_text`` classmethod participates in default
    filling without a dedicated converter.

    Example:
        >>> class Money:
        ...     def __init__(self, cents: int) -> None:
        ...         self.cents = cents
        ...
        ...     @classmethod
        ...     def from_text(cls, text: str) -> Money:
        ...         return cls(round(float(text) * 100))
        >>> isinstance(Money, ParsableFromText)
        True
    """

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Build an instance from text, raising ValueError when malformed."""
        ...


def _is_plain_class(tp: Any) -> bool:
    return isinstance(tp, type) and get_origin(tp) is None


@dataclass(frozen=True, slots=True)
class DurationConverter:
    """Parse compound durations (``"1s"``, ``"2h30m"``) into ``timedelta``."""

    def accepts(self, field: FieldDescriptor) -> bool:
        return field.target is timedelta

    def convert(self, path: str, field: FieldDescriptor, current: Any, text: str) -> Any:
        return parse_duration(text)


@dataclass(frozen=True, slots=True)
class TimestampConverter:
    """Parse timestamps into ``datetime``.

    The annotation may carry a layout after ``;``, e.g.
    ``"Fri, 10 Jan 2025 17:20:00 UTC;Mon, 02 Jan 2006 15:04:05 MST"``.
    Without one, the text is RFC 3339. A non-zero current value is kept.
    """

    def accepts(self, field: FieldDescriptor) -> bool:
        return field.target is datetime

    def convert(self, path: str, field: FieldDescriptor, current: Any, text: str) -> Any:
        if not is_zero_timestamp(current):
            return current
        value, layout = split_annotation(text)
        return parse_timestamp(value, layout)


@dataclass(frozen=True, slots=True)
class URLConverter:
    """Parse URLs into ``pydantic.AnyUrl`` (or the declared subclass)."""

    def accepts(self, field: FieldDescriptor) -> bool:
        return _is_plain_class(field.target) and issubclass(field.target, AnyUrl)

    def convert(self, path: str, field: FieldDescriptor, current: Any, text: str) -> Any:
        if current is not None:
            return current
        return TypeAdapter(field.target).validate_python(text)


@dataclass(frozen=True, slots=True)
class BytesConverter:
    """Decode ``0x``-prefixed hex or standard base64 into ``bytes``/``bytearray``."""

    def accepts(self, field: FieldDescriptor) -> bool:
        return field.target is bytes or field.target is bytearray

    def convert(self, path: str, field: FieldDescriptor, current: Any, text: str) -> Any:
        if current is not None and len(current) > 0:
            return current
        if not text:
            return current
        if text.startswith(HEX_PREFIX):
            digits = text[len(HEX_PREFIX) :]
            # bytes.fromhex skips whitespace between pairs.
            if _HEX_DIGITS.fullmatch(digits) is None:
                msg = f"invalid hex digits in {text!r}"
                raise ValueError(msg)
            decoded = bytes.fromhex(digits)
        else:
            # binascii.Error subclasses ValueError.
            decoded = base64.b64decode(text, validate=True)
        return bytearray(decoded) if field.target is bytearray else decoded


@dataclass(frozen=True, slots=True)
class TextParsableConverter:
    """Build values of text-parsable types.

    Claims targets implementing :class:`ParsableFromText` and the types in
    :data:`TEXT_CONSTRUCTIBLE_TYPES`. A non-None current value is kept.
    """

    def accepts(self, field: FieldDescriptor) -> bool:
        target = field.target
        if not _is_plain_class(target):
            return False
        return isinstance(target, ParsableFromText) or issubclass(
            target, TEXT_CONSTRUCTIBLE_TYPES
        )

    def convert(self, path: str, field: FieldDescriptor, current: Any, text: str) -> Any:
        if current is not None:
            return current
        target = field.target
        if isinstance(target, ParsableFromText):
            return target.from_text(text)
        return target(text)


def default_converters() -> list[Converter]:
    """Return a fresh list of the built-in converters, in default order.

    Callers composing a custom list can append to the result and pass it to
    :func:`autodefault.with_converters`.
    """
    return [
        DurationConverter(),
        TimestampConverter(),
        URLConverter(),
        BytesConverter(),
        TextParsableConverter(),
    ]
