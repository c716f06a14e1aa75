"""Port for the remote financial advisory service."""

from typing import Protocol

from src.domain.services.advisory import AdvisorySnapshot


class AdvisoryPort(Protocol):
    """Port producing free-text analysis and category suggestions.

    Implementations never raise to the caller; they return a fallback value
    when the service is unreachable or unconfigured.
    """

    async def analyze(self, snapshot: AdvisorySnapshot) -> str:
        """Return a short financial health commentary."""

    async def suggest_category(self, description: str) -> str:
        """Return a category name for a transaction description."""


__all__ = ["AdvisoryPort"]
