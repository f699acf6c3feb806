"""Argument checks shared by the builders.

Every helper raises :class:`~slashkit.errors.ValidationError` with a message
that names the offending field.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .errors import ValidationError


def check_not_blank(value: Any, name: str) -> str:
    if value is None:
        raise ValidationError(f"{name} may not be None")
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValidationError(f"{name} may not be blank")
    return value


def check_max_length(value: Optional[str], name: str, max_length: int) -> None:
    if value is not None and len(value) > max_length:
        raise ValidationError(
            f"{name} may not be longer than {max_length} characters (got {len(value)})"
        )


def check_optional_text(value: Any, name: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {type(value).__name__}")
    check_max_length(value, name, max_length)
    return value


def check_bounded_int(
    value: Any, name: str, *, minimum: int, maximum: int
) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")
    if not minimum <= value <= maximum:
        raise ValidationError(
            f"{name} must be between {minimum} and {maximum} (got {value})"
        )
    return value


def check_none_none(items: Optional[Iterable[Any]], name: str) -> list[Any]:
    if items is None:
        raise ValidationError(f"{name} may not be None")
    collected = list(items)
    for index, item in enumerate(collected):
        if item is None:
            raise ValidationError(f"{name} may not contain None (index {index})")
    return collected


def flatten_args(items: tuple[Any, ...], item_type: type) -> list[Any]:
    """Accept either varargs or a single iterable argument."""
    if len(items) != 1:
        return list(items)
    first = items[0]
    if isinstance(first, Iterable) and not isinstance(first, (str, item_type)):
        return list(first)
    return [first]
