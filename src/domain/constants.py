"""Domain constants for the finance ledger and portfolio."""

from decimal import Decimal

SUGGESTED_CATEGORIES = (
    "Food",
    "Transport",
    "Salary",
    "Housing",
    "Entertainment",
    "Medical",
    "Investment",
    "Shopping",
    "Other",
)

FALLBACK_CATEGORY = "Other"

UNKNOWN_ACCOUNT_LABEL = "Unknown account"

DEFAULT_CURRENCY = "TWD"

DEFAULT_DISPLAY_NAME = "User"

PRICE_TICK_MIN_FACTOR = Decimal("0.95")
PRICE_TICK_MAX_FACTOR = Decimal("1.05")


__all__ = [
    "SUGGESTED_CATEGORIES",
    "FALLBACK_CATEGORY",
    "UNKNOWN_ACCOUNT_LABEL",
    "DEFAULT_CURRENCY",
    "DEFAULT_DISPLAY_NAME",
    "PRICE_TICK_MIN_FACTOR",
    "PRICE_TICK_MAX_FACTOR",
]
