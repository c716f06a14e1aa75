"""Tests for advisory use cases."""

import asyncio
from datetime import date
from unittest.mock import MagicMock

from src.application.use_cases.constants import ANALYSIS_UNAVAILABLE_MESSAGE
from src.application.use_cases.request_financial_analysis import (
    RequestFinancialAnalysisUseCase,
    SuggestCategoryUseCase,
)
from src.domain.sample_data import build_sample_aggregate


class _FakeAdvisory:
    def __init__(self, analysis="Looks healthy", category="Food",
                 error=None, delay=0.0) -> None:
        self.analysis = analysis
        self.category = category
        self.error = error
        self.delay = delay
        self.snapshots = []
        self.descriptions = []

    async def analyze(self, snapshot):
        self.snapshots.append(snapshot)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.analysis

    async def suggest_category(self, description):
        self.descriptions.append(description)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.category


def _aggregate():
    return build_sample_aggregate(today=date(2024, 5, 1))


def test_analysis_sends_compact_snapshot() -> None:
    advisory = _FakeAdvisory()
    use_case = RequestFinancialAnalysisUseCase(advisory, logger=MagicMock())

    result = asyncio.run(use_case.execute(_aggregate()))

    assert result == "Looks healthy"
    payload = advisory.snapshots[0].to_dict()
    assert payload["totalCash"] == 43500.0
    assert payload["portfolioValue"] == 781850.0
    assert payload["topHoldings"] == ["2330", "AAPL"]
    assert len(payload["recentTransactions"]) == 3
    assert payload["recentTransactions"][0]["amount"] == 65000.0


def test_analysis_failure_returns_fallback_text() -> None:
    logger = MagicMock()
    use_case = RequestFinancialAnalysisUseCase(
        _FakeAdvisory(error=RuntimeError("boom")),
        logger=logger,
    )

    assert asyncio.run(use_case.execute(_aggregate())) == (
        ANALYSIS_UNAVAILABLE_MESSAGE
    )
    logger.error.assert_called_once()


def test_analysis_timeout_returns_fallback_text() -> None:
    logger = MagicMock()
    use_case = RequestFinancialAnalysisUseCase(
        _FakeAdvisory(delay=1.0),
        logger=logger,
        timeout_seconds=0.01,
    )

    assert asyncio.run(use_case.execute(_aggregate())) == (
        ANALYSIS_UNAVAILABLE_MESSAGE
    )
    logger.warning.assert_called_once()


def test_suggest_category_maps_onto_known_categories() -> None:
    advisory = _FakeAdvisory(category=" transport\n")
    use_case = SuggestCategoryUseCase(advisory, logger=MagicMock())

    assert asyncio.run(use_case.execute("  MRT card top-up ")) == "Transport"
    assert advisory.descriptions == ["MRT card top-up"]


def test_suggest_category_unknown_answer_falls_back() -> None:
    use_case = SuggestCategoryUseCase(
        _FakeAdvisory(category="Groceries"),
        logger=MagicMock(),
    )

    assert asyncio.run(use_case.execute("Supermarket")) == "Other"


def test_suggest_category_skips_short_descriptions() -> None:
    advisory = _FakeAdvisory()
    use_case = SuggestCategoryUseCase(advisory, logger=MagicMock())

    assert asyncio.run(use_case.execute("a")) == "Other"
    assert advisory.descriptions == []


def test_suggest_category_failures_fall_back() -> None:
    failing = SuggestCategoryUseCase(
        _FakeAdvisory(error=ConnectionError("offline")),
        logger=MagicMock(),
    )
    slow = SuggestCategoryUseCase(
        _FakeAdvisory(delay=1.0),
        logger=MagicMock(),
        timeout_seconds=0.01,
    )

    assert asyncio.run(failing.execute("Taxi home")) == "Other"
    assert asyncio.run(slow.execute("Taxi home")) == "Other"
