"""Use cases calling the remote advisory service."""

import asyncio

from src.application.ports.advisory import AdvisoryPort
from src.application.use_cases.constants import (
    ANALYSIS_UNAVAILABLE_MESSAGE,
    DEFAULT_ADVISORY_TIMEOUT_SECONDS,
    MIN_DESCRIPTION_LENGTH_FOR_SUGGESTION,
)
from src.domain.constants import FALLBACK_CATEGORY
from src.domain.models import FinanceAggregate
from src.domain.services.advisory import build_advisory_snapshot
from src.domain.services.normalization import match_suggested_category
from src.infrastructure.logging.logger import get_app_logger


class RequestFinancialAnalysisUseCase:
    """Ask the advisory service for commentary on the aggregate.

    Failures and timeouts never propagate; the caller always gets text.
    """

    def __init__(
        self,
        advisory: AdvisoryPort,
        logger=None,
        timeout_seconds: float = DEFAULT_ADVISORY_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the use case.

        Args:
            advisory: Port to the advisory service.
            logger: Optional logger compatible with logging.Logger-like API.
            timeout_seconds: Upper bound on the advisory call.
        """
        self._advisory = advisory
        self._logger = logger or get_app_logger()
        self._timeout_seconds = timeout_seconds

    async def execute(self, aggregate: FinanceAggregate) -> str:
        """Return the analysis text, or a fallback message on failure."""
        snapshot = build_advisory_snapshot(aggregate)
        try:
            return await asyncio.wait_for(
                self._advisory.analyze(snapshot),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            self._logger.warning(
                f"Advisory analysis timed out after {self._timeout_seconds}s"
            )
        except Exception as exc:
            self._logger.error(f"Advisory analysis failed: {exc}")
        return ANALYSIS_UNAVAILABLE_MESSAGE


class SuggestCategoryUseCase:
    """Ask the advisory service for a category matching a description."""

    def __init__(
        self,
        advisory: AdvisoryPort,
        logger=None,
        timeout_seconds: float = DEFAULT_ADVISORY_TIMEOUT_SECONDS,
    ) -> None:
        self._advisory = advisory
        self._logger = logger or get_app_logger()
        self._timeout_seconds = timeout_seconds

    async def execute(self, description: str) -> str:
        """Return a suggested category, or the fallback category.

        Args:
            description: Transaction description typed by the user.

        Returns:
            str: One of the suggested categories.
        """
        cleaned = (description or "").strip()
        if len(cleaned) < MIN_DESCRIPTION_LENGTH_FOR_SUGGESTION:
            return FALLBACK_CATEGORY
        try:
            suggestion = await asyncio.wait_for(
                self._advisory.suggest_category(cleaned),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            self._logger.warning(
                f"Category suggestion timed out after {self._timeout_seconds}s"
            )
            return FALLBACK_CATEGORY
        except Exception as exc:
            self._logger.error(f"Category suggestion failed: {exc}")
            return FALLBACK_CATEGORY
        category = match_suggested_category(suggestion)
        if category == FALLBACK_CATEGORY and suggestion:
            self._logger.info(
                f"Advisory suggested unknown category {suggestion!r}; "
                f"using {FALLBACK_CATEGORY}"
            )
        return category


__all__ = ["RequestFinancialAnalysisUseCase", "SuggestCategoryUseCase"]
