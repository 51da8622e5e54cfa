"""Per-call fill configuration and the options that override it.

A :class:`FillConfig` is built fresh for every :func:`autodefault.fill_defaults`
call and then passed through the caller's options in order, so later options
win over earlier ones. Nothing is shared between calls.

Example:
    >>> from autodefault import fill_defaults, with_annotation_key
    >>> fill_defaults(settings, with_annotation_key("env_default"))
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace

from autodefault.converters import Converter, default_converters

__all__ = [
    "DEFAULT_ANNOTATION_KEY",
    "FillConfig",
    "Option",
    "with_annotation_key",
    "with_converters",
]

DEFAULT_ANNOTATION_KEY = "default"


def _builtin_converters() -> tuple[Converter, ...]:
    return tuple(default_converters())


@dataclass(frozen=True, slots=True)
class FillConfig:
    """Settings for one fill.

    Attributes:
        annotation_key: Metadata key searched on each field.
        converters: Converters offered each eligible field, in priority order.
    """

    annotation_key: str = DEFAULT_ANNOTATION_KEY
    converters: tuple[Converter, ...] = field(default_factory=_builtin_converters)


Option = Callable[[FillConfig], FillConfig]
"""A configuration override: takes a config and returns the updated one."""


def with_annotation_key(name: str) -> Option:
    """Override the metadata key that holds each field's default.

    Args:
        name: Metadata key (default ``"default"``).

    Raises:
        ValueError: If ``name`` is empty.
    """
    if not name:
        msg = "Annotation key must be a non-empty string"
        raise ValueError(msg)

    def _apply(config: FillConfig) -> FillConfig:
        return replace(config, annotation_key=name)

    return _apply


def with_converters(*converters: Converter | Iterable[Converter]) -> Option:
    """Replace the converter list wholesale.

    Accepts converters as positional arguments or a single iterable. To keep
    the built-ins, start from :func:`autodefault.default_converters`.

    Raises:
        TypeError: If any item is a class rather than an instance, or does
            not implement the Converter protocol.
    """
    items: tuple[object, ...] = converters
    single = converters[0] if len(converters) == 1 else None
    if isinstance(single, Iterable) and not isinstance(single, (Converter, type)):
        items = tuple(single)

    for item in items:
        if isinstance(item, type):
            msg = f"Expected a Converter instance, got class {item.__name__}"
            raise TypeError(msg)
        if not isinstance(item, Converter):
            msg = f"Expected a Converter, got {type(item).__name__}"
            raise TypeError(msg)
    chosen: tuple[Converter, ...] = items  # type: ignore[assignment]

    def _apply(config: FillConfig) -> FillConfig:
        return replace(config, converters=chosen)

    return _apply
