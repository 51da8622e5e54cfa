"""Exception hierarchy for default filling.

Every error raised by :func:`autodefault.fill_defaults` derives from
:class:`DefaultsError` and carries a machine-readable ``error_code`` plus
structured ``context`` naming the field path and types involved.

Errors are first-stop: the walk aborts on the first failure, so a record may
be left partially filled. Fields filled before the failure stay filled.

Example:
    >>> from autodefault.exceptions import DefaultConversionError
    >>> raise DefaultConversionError("port", "eighty", "int")
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "DefaultConversionError",
    "DefaultsError",
    "InvalidInputError",
    "UnsupportedFieldTypeError",
]


class DefaultsError(Exception):
    """Base class for all default-filling errors.

    ``context`` holds the field-level details of the failure. Keys used by the
    library: ``path`` (dot-joined field path), ``text`` (annotation text),
    ``target_type`` / ``field_type`` / ``received`` (type names), ``reason``
    (``not_a_record``, ``record_class``, ``immutable_record`` or
    ``cannot_allocate``) and ``cause`` (the underlying parser error).

    Example:
        >>> str(DefaultsError("fill failed", {"path": "server.port"}))
        'fill failed (path=server.port)'
    """

    error_code: str = "DEFAULTS_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"


class InvalidInputError(DefaultsError):
    """Raised when the argument is not a mutable record instance.

    Checked before any field is read or written, so the failure has no
    partial effect.

    Attributes:
        error_code: "INVALID_INPUT" (class constant).
        received: Type name of the rejected argument.

    Example:
        >>> raise InvalidInputError("int")
        InvalidInputError: input must be a mutable dataclass or pydantic model instance, got int
    """

    error_code: str = "INVALID_INPUT"

    def __init__(self, received: str, **extra_context: Any) -> None:
        """Initialize invalid input error.

        Args:
            received: Type name of the rejected argument.
            **extra_context: Additional debugging context (e.g. reason).
        """
        self.received = received
        message = f"input must be a mutable dataclass or pydantic model instance, got {received}"
        context = {"received": received, **extra_context}
        super().__init__(message, context)


class DefaultConversionError(DefaultsError):
    """Raised when annotation text cannot be converted to the field's type.

    Attributes:
        error_code: "DEFAULT_CONVERSION_FAILED" (class constant).
        path: Dot-joined path of the field from the record root.
        text: The offending annotation text.
        target_type: Name of the type the text was converted to.
    """

    error_code: str = "DEFAULT_CONVERSION_FAILED"

    def __init__(
        self,
        path: str,
        text: str,
        target_type: str,
        **extra_context: Any,
    ) -> None:
        """Initialize conversion error.

        Args:
            path: Field path (e.g. "server.tls.cert_file").
            text: The annotation text that failed to convert.
            target_type: Name of the target type.
            **extra_context: Additional debugging context (e.g. cause).
        """
        self.path = path
        self.text = text
        self.target_type = target_type
        message = f"cannot set default value for {path}, parse {text} to {target_type} failed"
        context = {
            "path": path,
            "text": text,
            "target_type": target_type,
            **extra_context,
        }
        super().__init__(message, context)


class UnsupportedFieldTypeError(DefaultsError):
    """Raised when an annotated field has a type no converter or setter handles.

    Attributes:
        error_code: "UNSUPPORTED_FIELD_TYPE" (class constant).
        path: Dot-joined path of the field from the record root.
        field_type: Name of the declared field type.
    """

    error_code: str = "UNSUPPORTED_FIELD_TYPE"

    def __init__(self, path: str, field_type: str, **extra_context: Any) -> None:
        """Initialize unsupported field type error.

        Args:
            path: Field path.
            field_type: Name of the declared field type.
            **extra_context: Additional debugging context (e.g. reason).
        """
        self.path = path
        self.field_type = field_type
        message = f"cannot set default value for {path}, no suitable default setter for {field_type}"
        context = {"path": path, "field_type": field_type, **extra_context}
        super().__init__(message, context)
