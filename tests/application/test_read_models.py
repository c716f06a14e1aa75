"""Tests for dashboard, portfolio and transaction read use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from src.application.use_cases.get_portfolio_overview import (
    GetPortfolioOverviewUseCase,
)
from src.application.use_cases.list_transactions import (
    ListTransactionsUseCase,
)
from src.domain.models import CategoryAmount, FinanceAggregate
from src.domain.sample_data import build_sample_aggregate


def test_dashboard_summary_for_sample_data() -> None:
    aggregate = build_sample_aggregate(today=date(2024, 5, 1))

    summary = GetDashboardSummaryUseCase(logger=MagicMock()).execute(aggregate)

    assert summary.total_balance == Decimal("43500")
    assert summary.total_investments == Decimal("781850")
    assert summary.total_assets == Decimal("825350")
    assert summary.totals.income_total == Decimal("65000")
    assert summary.totals.expense_total == Decimal("1450")
    assert summary.categories == [
        CategoryAmount(category="Transport", amount=Decimal("1200")),
        CategoryAmount(category="Food", amount=Decimal("250")),
    ]


def test_dashboard_summary_for_empty_aggregate() -> None:
    summary = GetDashboardSummaryUseCase(logger=MagicMock()).execute(
        FinanceAggregate()
    )

    assert summary.total_assets == Decimal("0")
    assert summary.categories == []


def test_portfolio_overview_keeps_holding_order() -> None:
    aggregate = build_sample_aggregate(today=date(2024, 5, 1))

    overview = GetPortfolioOverviewUseCase().execute(aggregate)

    assert [row.holding.symbol for row in overview.rows] == ["2330", "AAPL"]
    assert overview.rows[1].metrics.gain_loss == Decimal("350")
    assert overview.totals.total_gain_loss == Decimal("230350")


def test_list_transactions_resolves_account_names() -> None:
    aggregate = build_sample_aggregate(today=date(2024, 5, 1))
    aggregate = FinanceAggregate(
        accounts=aggregate.accounts[:1],
        transactions=aggregate.transactions,
        stocks=aggregate.stocks,
    )

    rows = ListTransactionsUseCase().execute(aggregate)
    expenses = ListTransactionsUseCase().execute(aggregate, category="Food")

    assert [row.account_name for row in rows] == [
        "Salary Account",
        "Unknown account",
        "Unknown account",
    ]
    assert [row.transaction.id for row in expenses] == ["tx_demo_2"]
