"""Eligibility test: is a field still unset?

Only eligible fields receive a default. Eligibility is decided once per
field from the shape of its current value:

- ``None``: eligible.
- Nested record (dataclass or pydantic model instance): always eligible, so
  the walker descends and lets the nested fields decide for themselves.
- Scalars (``bool``, numbers, ``str``, enums, ``timedelta``): eligible when
  equal to the zero value of their type.
- Byte blobs and other sized containers: eligible when empty.
- Anything else: eligible. Converters decide whether such a value already
  counts as set, and the scalar setter rejects unsupported types.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from numbers import Number
from typing import Any

from autodefault.fields import is_record

__all__ = ["is_eligible"]

_SCALAR_TYPES: tuple[type, ...] = (bool, Number, str, Enum, timedelta)
_SIZED_TYPES: tuple[type, ...] = (
    bytes,
    bytearray,
    memoryview,
    list,
    tuple,
    dict,
    set,
    frozenset,
)


def is_eligible(value: Any) -> bool:
    """Return True if ``value`` counts as unset.

    Example:
        >>> is_eligible(0), is_eligible(""), is_eligible(b"\\x01")
        (True, True, False)
    """
    if value is None:
        return True
    if is_record(value):
        return True
    if isinstance(value, _SCALAR_TYPES):
        # Zero values are falsy: 0, 0.0, Decimal(0), "", False, timedelta(0).
        return not value
    if isinstance(value, _SIZED_TYPES):
        return len(value) == 0
    return True
