"""
Input validation helpers.

Each helper returns the value as a float (or enum member) when it passes and
raises ``ValidationError`` naming the offending field otherwise.
"""

from __future__ import annotations

import math
from enum import Enum
from numbers import Real
from typing import TypeVar

from ..errors import ValidationError

E = TypeVar("E", bound=Enum)


def require_number(value, field: str) -> float:
    """Present, numeric and finite."""
    if value is None:
        raise ValidationError(field, "is required")
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(field, f"must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(field, "must be finite")
    return value


def require_positive(value, field: str, maximum: float | None = None) -> float:
    """Finite and strictly positive, optionally bounded above (inclusive)."""
    value = require_number(value, field)
    if value <= 0:
        raise ValidationError(field, f"must be positive, got {value:g}")
    if maximum is not None and value > maximum:
        raise ValidationError(field, f"must be at most {maximum:g}, got {value:g}")
    return value


def require_non_negative(value, field: str) -> float:
    value = require_number(value, field)
    if value < 0:
        raise ValidationError(field, f"must be >= 0, got {value:g}")
    return value


def require_range(value, field: str, low: float, high: float,
                  high_inclusive: bool = True) -> float:
    """Finite and within [low, high] (or [low, high) when ``high_inclusive`` is False)."""
    value = require_number(value, field)
    above = value > high if high_inclusive else value >= high
    if value < low or above:
        bracket = "]" if high_inclusive else ")"
        raise ValidationError(
            field, f"must be in [{low:g}, {high:g}{bracket}, got {value:g}"
        )
    return value


def require_choice(value, enum_cls: type[E], field: str) -> E:
    """Accept an enum member or its string value (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for member in enum_cls:
            if str(member.value).lower() == key:
                return member
    options = ", ".join(str(m.value) for m in enum_cls)
    raise ValidationError(field, f"must be one of: {options}; got {value!r}")
