"""Ordered converter registry.

Converters are tried in order and the first one whose ``accepts`` returns
True wins. Built-in converters claim disjoint target types, so their order
only matters once callers add converters that overlap them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from autodefault.exceptions import DefaultConversionError
from autodefault.fields import type_name

if TYPE_CHECKING:
    from collections.abc import Iterable

    from autodefault.converters import Converter
    from autodefault.fields import FieldDescriptor

__all__ = ["ConversionResult", "ConverterRegistry"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of a matched converter.

    Attributes:
        converter: The converter that claimed the field.
        value: Value to store. Identical to the field's current value when
            the converter left the field as it was.
    """

    converter: Converter
    value: Any


class ConverterRegistry:
    """Offers fields to an ordered list of converters.

    Args:
        converters: Converters in priority order.
    """

    def __init__(self, converters: Iterable[Converter]) -> None:
        self._converters: tuple[Converter, ...] = tuple(converters)

    @property
    def converters(self) -> tuple[Converter, ...]:
        """Registered converters, in priority order."""
        return self._converters

    def offer(
        self,
        path: str,
        field: FieldDescriptor,
        current: Any,
        text: str,
    ) -> ConversionResult | None:
        """Offer a field to the first converter that accepts it.

        Args:
            path: Dot-joined field path.
            field: Descriptor of the field.
            current: The field's current value.
            text: Raw annotation text.

        Returns:
            ConversionResult of the first accepting converter, or None if no
            converter accepts the field's target type.

        Raises:
            DefaultConversionError: If the accepting converter cannot convert
                the text.
        """
        for converter in self._converters:
            if not converter.accepts(field):
                continue
            try:
                value = converter.convert(path, field, current, text)
            except (ValueError, TypeError, ArithmeticError) as exc:
                logger.debug(
                    "default_conversion_failed",
                    extra={
                        "path": path,
                        "converter": type(converter).__name__,
                        "error": str(exc),
                    },
                )
                raise DefaultConversionError(
                    path,
                    text,
                    type_name(field.target),
                    cause=f"{type(exc).__name__}: {exc}",
                ) from exc
            return ConversionResult(converter=converter, value=value)
        return None
