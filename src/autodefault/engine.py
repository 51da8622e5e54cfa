"""Entry point for filling annotated defaults into a record."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from autodefault.config import FillConfig
from autodefault.exceptions import InvalidInputError
from autodefault.fields import is_mutable_record, is_record, type_name
from autodefault.walker import FieldWalker

if TYPE_CHECKING:
    from autodefault.config import Option

__all__ = ["fill_defaults"]

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


def _reject_reason(record: object) -> str | None:
    if isinstance(record, type):
        return "record_class"
    if not is_record(record):
        return "not_a_record"
    if not is_mutable_record(record):
        return "immutable_record"
    return None


def fill_defaults(record: RecordT, *options: Option) -> RecordT:
    """Fill unset fields of ``record`` from their default annotations.

    The record is mutated in place and returned. Options are applied in the
    order given; later options win.

    Args:
        record: A mutable dataclass or pydantic model instance.
        *options: Overrides such as :func:`with_annotation_key` and
            :func:`with_converters`.

    Returns:
        The same record instance.

    Raises:
        InvalidInputError: If ``record`` is not a mutable record instance.
            Raised before any field is touched.
        DefaultConversionError: If annotation text cannot be converted. Fields
            filled before the failure stay filled.
        UnsupportedFieldTypeError: If an annotated field has a type that no
            converter or built-in setter can handle.

    Example:
        >>> @dataclass
        ... class Server:
        ...     host: str = field(default="", metadata={"default": "localhost"})
        ...     port: int = field(default=0, metadata={"default": "8080"})
        >>> fill_defaults(Server(port=9000))
        Server(host='localhost', port=9000)
    """
    reason = _reject_reason(record)
    if reason is not None:
        received = (
            f"type[{record.__qualname__}]" if isinstance(record, type) else type_name(type(record))
        )
        raise InvalidInputError(received, reason=reason)

    config = FillConfig()
    for option in options:
        config = option(config)

    FieldWalker(config).walk(record)
    logger.debug(
        "defaults_filled",
        extra={
            "record_type": type_name(type(record)),
            "annotation_key": config.annotation_key,
        },
    )
    return record
