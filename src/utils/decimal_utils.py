"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from a stored document or a form input.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str) and not value.strip():
        return Decimal("0")
    return Decimal(str(value))


def round_to_cents(value: Decimal) -> Decimal:
    """Round a value to two decimal places, halves away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = ["CENT", "coerce_decimal", "round_to_cents"]
