"""Recursive field walker.

Pre-order traversal over a record's declared fields. For each field with an
annotation:

1. Skip it if its current value is not eligible (already set).
2. Offer it to the converter registry; a matching converter sets it.
3. Otherwise, if the field is a nested record, allocate it when it is None
   and descend so the nested fields apply their own annotations.
4. Otherwise parse the annotation with the built-in scalar setter.

Fields without an annotation are never read, written or descended into.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from autodefault.eligibility import is_eligible
from autodefault.exceptions import DefaultConversionError, UnsupportedFieldTypeError
from autodefault.fields import (
    describe_fields,
    is_mutable_record,
    is_record,
    is_record_type,
    join_path,
    type_name,
)
from autodefault.registry import ConverterRegistry
from autodefault.scalars import scalar_parser

if TYPE_CHECKING:
    from autodefault.config import FillConfig
    from autodefault.fields import FieldDescriptor

__all__ = ["FieldWalker"]

logger = logging.getLogger(__name__)


class FieldWalker:
    """Applies annotated defaults to one record graph.

    A walker is created per fill and keeps the chain of records currently
    being walked, so a record reached again through its own descendants is
    not re-entered.

    Args:
        config: Fill configuration (annotation key and converters).
    """

    def __init__(self, config: FillConfig) -> None:
        self._annotation_key = config.annotation_key
        self._registry = ConverterRegistry(config.converters)
        self._active: list[Any] = []

    def walk(self, record: Any, parent_path: str = "") -> None:
        """Fill the annotated fields of ``record`` in place.

        Args:
            record: Mutable record instance.
            parent_path: Path of ``record`` from the root, empty for the root.

        Raises:
            DefaultConversionError: If annotation text cannot be converted.
            UnsupportedFieldTypeError: If an annotated field's type has no
                converter, is not a record and is not a supported scalar.
        """
        self._active.append(record)
        try:
            for field in describe_fields(record, self._annotation_key):
                if field.requested:
                    self._visit(record, field, join_path(parent_path, field.name))
        finally:
            self._active.pop()

    def _visit(self, record: Any, field: FieldDescriptor, path: str) -> None:
        text = field.default_text or ""
        current = getattr(record, field.name)
        if not is_eligible(current):
            return

        result = self._registry.offer(path, field, current, text)
        if result is not None:
            if result.value is not current:
                setattr(record, field.name, result.value)
                logger.debug(
                    "default_applied",
                    extra={
                        "path": path,
                        "source": "converter",
                        "converter": type(result.converter).__name__,
                    },
                )
            return

        if is_record_type(field.target) or is_record(current):
            self._descend(record, field, path, current)
            return

        parser = scalar_parser(field.target)
        if parser is None:
            raise UnsupportedFieldTypeError(path, type_name(field.annotation))
        try:
            value = parser(text)
        except ValueError as exc:
            raise DefaultConversionError(
                path,
                text,
                type_name(field.target),
                cause=f"{type(exc).__name__}: {exc}",
            ) from exc
        setattr(record, field.name, value)
        logger.debug("default_applied", extra={"path": path, "source": "scalar"})

    def _descend(self, record: Any, field: FieldDescriptor, path: str, current: Any) -> None:
        if current is None:
            if not is_mutable_record(field.target):
                raise UnsupportedFieldTypeError(
                    path, type_name(field.target), reason="immutable_record"
                )
            if any(type(active) is field.target for active in self._active):
                # Allocating a record of an enclosing type would never end.
                logger.debug(
                    "default_skipped",
                    extra={"path": path, "reason": "recursive_record_type"},
                )
                return
            setattr(record, field.name, self._allocate(field, path))
            # Re-read: validating models may store a copy.
            current = getattr(record, field.name)
            logger.debug("default_applied", extra={"path": path, "source": "allocated"})
        elif any(active is current for active in self._active):
            return
        elif not is_mutable_record(current):
            reason = "immutable_record" if is_record(current) else "not_a_record"
            raise UnsupportedFieldTypeError(path, type_name(type(current)), reason=reason)
        self.walk(current, path)

    def _allocate(self, field: FieldDescriptor, path: str) -> Any:
        try:
            return field.target()
        except (TypeError, ValueError) as exc:
            raise UnsupportedFieldTypeError(
                path,
                type_name(field.target),
                reason="cannot_allocate",
                cause=f"{type(exc).__name__}: {exc}",
            ) from exc
