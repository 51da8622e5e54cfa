"""Field descriptors for annotated records.

A *record* is a mutable instance of a dataclass or a pydantic model. Each
declared field is described once per fill as a :class:`FieldDescriptor`,
which carries the resolved type and the annotation text found under the
configured annotation key.

Annotations live in the field's own metadata:

    Dataclasses::

        @dataclass
        class Server:
            port: int = field(default=0, metadata={"default": "8080"})
            tls: TLS = field(default_factory=TLS, metadata={"default": "dive"})

    Pydantic models::

        class Server(BaseModel):
            port: int = Field(0, json_schema_extra={"default": "8080"})
"""

from __future__ import annotations

import dataclasses
import logging
import sys
import types
from dataclasses import dataclass
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel

from autodefault.exceptions import InvalidInputError

__all__ = [
    "ANNOTATION_SEPARATOR",
    "DESCEND_MARKER",
    "FieldDescriptor",
    "describe_fields",
    "is_mutable_record",
    "is_record",
    "is_record_type",
    "join_path",
    "split_annotation",
    "type_name",
    "unwrap_optional",
]

logger = logging.getLogger(__name__)

DESCEND_MARKER = "dive"
"""Annotation value asking the walker to descend into a nested record."""

ANNOTATION_SEPARATOR = ";"
"""Separates a literal default from its auxiliary parameter."""

_NONE_TYPE = type(None)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One declared field of a record type.

    Attributes:
        name: Attribute name on the record.
        annotation: Declared type, with string annotations resolved.
        target: Declared type with ``Optional`` and ``Annotated`` stripped.
        nullable: Whether ``None`` is a member of the declared type.
        default_text: Annotation text, or None when the field has none.
    """

    name: str
    annotation: Any
    target: Any
    nullable: bool
    default_text: str | None

    @property
    def requested(self) -> bool:
        """True when the field carries a non-empty annotation."""
        return bool(self.default_text)


def split_annotation(text: str) -> tuple[str, str | None]:
    """Split annotation text into the literal and its auxiliary parameter.

    Example:
        >>> split_annotation("10 Jan 2025;02 Jan 2006")
        ('10 Jan 2025', '02 Jan 2006')
        >>> split_annotation("1s")
        ('1s', None)
    """
    literal, sep, param = text.partition(ANNOTATION_SEPARATOR)
    if not sep or not param:
        return literal, None
    return literal, param


def join_path(parent: str, name: str) -> str:
    """Append a field name to a dot-joined field path."""
    if not parent:
        return name
    return f"{parent}.{name}"


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Strip ``Annotated`` and ``None`` members from a declared type.

    Returns:
        Tuple of (target type, nullable). Unions with more than one
        non-None member are returned as a union of the remaining members.
    """
    target = annotation
    nullable = False
    while True:
        origin = get_origin(target)
        if origin is Annotated:
            target = get_args(target)[0]
            continue
        if origin is Union or origin is types.UnionType:
            members = get_args(target)
            rest = tuple(m for m in members if m is not _NONE_TYPE)
            if len(rest) != len(members):
                nullable = True
            if len(rest) == 1:
                target = rest[0]
                continue
            target = Union[rest]  # noqa: UP007
        return target, nullable


def _is_plain_class(tp: Any) -> bool:
    return isinstance(tp, type) and get_origin(tp) is None


def is_record_type(tp: Any) -> bool:
    """Return True if ``tp`` is a dataclass or pydantic model class."""
    if not _is_plain_class(tp):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_record(value: Any) -> bool:
    """Return True if ``value`` is a dataclass or pydantic model instance."""
    return not isinstance(value, type) and is_record_type(type(value))


def is_mutable_record(obj: Any) -> bool:
    """Return True if ``obj`` (instance or class) is a record that allows assignment.

    Frozen dataclasses and pydantic models with ``frozen=True`` are immutable.
    """
    cls = obj if isinstance(obj, type) else type(obj)
    if not is_record_type(cls):
        return False
    if dataclasses.is_dataclass(cls):
        return not cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    return not cls.model_config.get("frozen", False)


def type_name(tp: Any) -> str:
    """Readable name of a type for error messages.

    Example:
        >>> type_name(int)
        'int'
        >>> type_name(int | None)
        'int | None'
    """
    if _is_plain_class(tp):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")


def describe_fields(record: Any, annotation_key: str) -> tuple[FieldDescriptor, ...]:
    """Describe the declared fields of a record, in declaration order.

    Args:
        record: A record instance or record class.
        annotation_key: Metadata key holding the default annotation.

    Returns:
        Tuple of field descriptors.

    Raises:
        InvalidInputError: If ``record`` is neither a dataclass nor a
            pydantic model (instance or class).
    """
    cls = record if isinstance(record, type) else type(record)
    if _is_plain_class(cls) and dataclasses.is_dataclass(cls):
        return _describe_dataclass(cls, annotation_key)
    if _is_plain_class(cls) and issubclass(cls, BaseModel):
        return _describe_model(cls, annotation_key)
    raise InvalidInputError(type_name(cls), reason="not_a_record")


def _annotation_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _declaring_class(cls: type[Any], name: str) -> type[Any]:
    for base in cls.__mro__:
        if name in base.__dict__.get("__annotations__", {}):
            return base
    return cls


def _resolve_field_type(cls: type[Any], f: dataclasses.Field[Any]) -> Any:
    """Evaluate one string annotation in the namespace of the class declaring it.

    Names only imported under ``TYPE_CHECKING`` cannot be resolved; such a
    field keeps its string annotation while its siblings still resolve.
    """
    if not isinstance(f.type, str):
        return f.type
    owner = _declaring_class(cls, f.name)
    module = sys.modules.get(owner.__module__)
    module_ns = vars(module) if module is not None else {}
    # Module names win over class attributes, as in typing.get_type_hints.
    try:
        return eval(f.type, dict(vars(owner)), module_ns)  # noqa: S307
    except (NameError, AttributeError):
        logger.warning(
            "type_hint_unresolved",
            extra={"record_type": cls.__qualname__, "field": f.name, "annotation": f.type},
        )
        return f.type


def _describe_dataclass(cls: type[Any], annotation_key: str) -> tuple[FieldDescriptor, ...]:
    descriptors: list[FieldDescriptor] = []
    for f in dataclasses.fields(cls):
        annotation = _resolve_field_type(cls, f)
        target, nullable = unwrap_optional(annotation)
        descriptors.append(
            FieldDescriptor(
                name=f.name,
                annotation=annotation,
                target=target,
                nullable=nullable,
                default_text=_annotation_text(f.metadata.get(annotation_key)),
            )
        )
    return tuple(descriptors)


def _describe_model(cls: type[BaseModel], annotation_key: str) -> tuple[FieldDescriptor, ...]:
    descriptors: list[FieldDescriptor] = []
    for name, info in cls.model_fields.items():
        extra = info.json_schema_extra
        text = extra.get(annotation_key) if isinstance(extra, dict) else None
        target, nullable = unwrap_optional(info.annotation)
        descriptors.append(
            FieldDescriptor(
                name=name,
                annotation=info.annotation,
                target=target,
                nullable=nullable,
                default_text=_annotation_text(text),
            )
        )
    return tuple(descriptors)

