"""Decimal arithmetic helpers for reproducible aggregates.

Aggregates are computed in Decimal so the same review set always produces
the same published numbers, independent of float accumulation order. Values
are converted back to float only at the output boundary.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Tuple

from .types import ValidationError

ZERO = Decimal("0")
ONE = Decimal("1")


def to_decimal(value: Any, name: str = "value") -> Decimal:
    """Convert a value to Decimal with validation.

    Args:
        value: Value to convert (int, float, str, Decimal)
        name: Name for error messages

    Returns:
        Decimal representation

    Raises:
        ValidationError: If value cannot be converted or is invalid
    """
    if value is None:
        raise ValidationError(f"{name} is None")
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be numeric, got bool")

    try:
        if isinstance(value, Decimal):
            d = value
        else:
            d = Decimal(str(value))

        if d.is_nan():
            raise ValidationError(f"{name} is NaN")
        if d.is_infinite():
            raise ValidationError(f"{name} is infinite")

        return d

    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValidationError(f"Cannot convert {name}={value!r} to Decimal: {e}")


def round_decimal(value: Decimal, places: int = 2, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round a Decimal to a fixed number of places."""
    quantum = Decimal(1).scaleb(-places)
    return value.quantize(quantum, rounding=rounding)


def safe_divide(
    numerator: Decimal,
    denominator: Decimal,
    default: Decimal = ZERO,
) -> Decimal:
    """Divide two Decimals, returning default on a zero divisor."""
    if denominator == ZERO:
        return default
    return numerator / denominator


def clamp(value: Decimal, min_val: Decimal, max_val: Decimal) -> Decimal:
    """Clamp a Decimal to a range."""
    return max(min_val, min(value, max_val))


def weighted_sum(pairs: Iterable[Tuple[Decimal, Decimal]]) -> Tuple[Decimal, Decimal]:
    """Return (Σ value·weight, Σ weight) over (value, weight) pairs."""
    total = ZERO
    weight_total = ZERO
    for value, weight in pairs:
        total += value * weight
        weight_total += weight
    return total, weight_total


def to_float(value: Decimal) -> float:
    return float(value)


__all__ = [
    "ZERO",
    "ONE",
    "to_decimal",
    "round_decimal",
    "safe_divide",
    "clamp",
    "weighted_sum",
    "to_float",
]
