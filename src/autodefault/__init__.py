"""autodefault -- fill unset record fields from declarative default annotations.

Annotate dataclass or pydantic model fields with a textual default, then call
:func:`fill_defaults` on a partially populated instance. Unset fields receive
their parsed default, nested records marked ``"dive"`` are walked, and fields
that already hold a value are left alone.

Example:
    >>> from dataclasses import dataclass, field
    >>> from datetime import timedelta
    >>> from autodefault import fill_defaults
    >>> @dataclass
    ... class Client:
    ...     retries: int = field(default=0, metadata={"default": "3"})
    ...     timeout: timedelta = field(default=timedelta(0), metadata={"default": "2s"})
    >>> fill_defaults(Client())
    Client(retries=3, timeout=datetime.timedelta(seconds=2))
"""

from autodefault.config import (
    DEFAULT_ANNOTATION_KEY,
    FillConfig,
    Option,
    with_annotation_key,
    with_converters,
)
from autodefault.converters import (
    TEXT_CONSTRUCTIBLE_TYPES,
    BytesConverter,
    Converter,
    DurationConverter,
    ParsableFromText,
    TextParsableConverter,
    TimestampConverter,
    URLConverter,
    default_converters,
)
from autodefault.durations import parse_duration
from autodefault.eligibility import is_eligible
from autodefault.engine import fill_defaults
from autodefault.exceptions import (
    DefaultConversionError,
    DefaultsError,
    InvalidInputError,
    UnsupportedFieldTypeError,
)
from autodefault.fields import DESCEND_MARKER, FieldDescriptor, describe_fields
from autodefault.registry import ConversionResult, ConverterRegistry
from autodefault.timestamps import parse_timestamp
from autodefault.walker import FieldWalker

__all__ = [
    "DEFAULT_ANNOTATION_KEY",
    "DESCEND_MARKER",
    "TEXT_CONSTRUCTIBLE_TYPES",
    "BytesConverter",
    "ConversionResult",
    "Converter",
    "ConverterRegistry",
    "DefaultConversionError",
    "DefaultsError",
    "DurationConverter",
    "FieldDescriptor",
    "FieldWalker",
    "FillConfig",
    "InvalidInputError",
    "Option",
    "ParsableFromText",
    "TextParsableConverter",
    "TimestampConverter",
    "URLConverter",
    "UnsupportedFieldTypeError",
    "default_converters",
    "describe_fields",
    "fill_defaults",
    "is_eligible",
    "parse_duration",
    "parse_timestamp",
    "with_annotation_key",
    "with_converters",
]
