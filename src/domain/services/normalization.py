"""Domain normalization helpers."""

from uuid import uuid4

from src.domain.constants import FALLBACK_CATEGORY, SUGGESTED_CATEGORIES


def normalize_symbol(symbol: str | None) -> str | None:
    """Normalize ticker symbols.

    Args:
        symbol: Raw ticker entered by the user.

    Returns:
        str | None: Upper-cased ticker, or None when blank.
    """
    if not symbol:
        return None
    cleaned = symbol.strip()
    return cleaned.upper() if cleaned else None


def normalize_category(category: str | None) -> str:
    """Normalize free-form category labels.

    Args:
        category: Raw category value.

    Returns:
        str: Trimmed category, or the fallback category when blank.
    """
    if not category:
        return FALLBACK_CATEGORY
    cleaned = category.strip()
    return cleaned or FALLBACK_CATEGORY


def match_suggested_category(suggestion: str | None) -> str:
    """Map an advisory suggestion onto the suggested category set.

    Args:
        suggestion: Raw text returned by the advisory service.

    Returns:
        str: The matching suggested category, or the fallback category.
    """
    if not suggestion:
        return FALLBACK_CATEGORY
    cleaned = suggestion.strip().strip(".\"'").lower()
    for category in SUGGESTED_CATEGORIES:
        if category.lower() == cleaned:
            return category
    return FALLBACK_CATEGORY


def new_identifier(prefix: str) -> str:
    """Return a fresh identifier such as ``acc_3f2a...``."""
    return f"{prefix}_{uuid4().hex[:16]}"


__all__ = [
    "normalize_symbol",
    "normalize_category",
    "match_suggested_category",
    "new_identifier",
]
