"""Fail-fast guards for single values."""

from typing import Any, TypeVar

from cyclingdata.exceptions import ValidationError
from cyclingdata.utils.jsontypes import is_finite_number, is_number, json_type_name

T = TypeVar("T")


def assert_defined(value: T | None, field: str) -> T:
    """
    Return ``value`` unless it is None.

    Raises:
        ValidationError: If value is None.
    """
    if value is None:
        msg = f"{field} is required but was None"
        raise ValidationError(msg, field, value)
    return value


def assert_number_in_range(value: Any, field: str, min_value: float, max_value: float) -> float:
    """
    Return ``value`` if it is a finite number within [min_value, max_value].

    Raises:
        ValidationError: If the value is not a number, not finite, or out of range.
    """
    if not is_number(value):
        msg = f"{field} must be a number, got {json_type_name(value)}"
        raise ValidationError(msg, field, value)

    if not is_finite_number(value):
        msg = f"{field} must be a finite number"
        raise ValidationError(msg, field, value)

    if value < min_value or value > max_value:
        msg = f"{field} must be between {min_value} and {max_value}, got {value}"
        raise ValidationError(msg, field, value)

    return value


def assert_non_empty_string(value: Any, field: str) -> str:
    """
    Return ``value`` if it is a string with non-whitespace content.

    Raises:
        ValidationError: If the value is not a string or is blank.
    """
    if not isinstance(value, str):
        msg = f"{field} must be a string, got {json_type_name(value)}"
        raise ValidationError(msg, field, value)

    if not value.strip():
        msg = f"{field} cannot be empty"
        raise ValidationError(msg, field, value)

    return value
