"""Helpers for describing and testing values decoded from JSON."""

import math
import sys
from typing import Any

# Placeholder for a field absent from a JSON object
MISSING: Any = object()


def json_type_name(value: Any) -> str:
    """Name the JSON type of a decoded value, e.g. ``"string"`` or ``"null"``."""
    if value is MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def is_number(value: Any) -> bool:
    """True for JSON numbers; booleans are not numbers."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    """
    True for JSON numbers that are neither infinite nor NaN.

    Integers too large for a float are not finite numbers.
    """
    if not is_number(value):
        return False
    if isinstance(value, int):
        return abs(value) <= sys.float_info.max
    return math.isfinite(value)
