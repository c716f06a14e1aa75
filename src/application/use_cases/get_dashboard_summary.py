"""Use case to compute the dashboard headline figures."""

from src.domain.models import CategoryAmount, DashboardSummary, FinanceAggregate
from src.domain.services.ledger import (
    compute_category_breakdown,
    compute_income_expense_totals,
    compute_total_balance,
)
from src.domain.services.portfolio import compute_total_investments
from src.infrastructure.logging.logger import get_app_logger


class GetDashboardSummaryUseCase:
    """Compute balances, income/expense totals and the expense breakdown."""

    def __init__(self, logger=None) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger or get_app_logger()

    def execute(self, aggregate: FinanceAggregate) -> DashboardSummary:
        """Return the dashboard summary for the aggregate.

        Args:
            aggregate: Current session aggregate.

        Returns:
            DashboardSummary: Totals and the expense breakdown, largest
            category first.
        """
        total_balance = compute_total_balance(
            aggregate.accounts,
            logger=self._logger,
        )
        total_investments = compute_total_investments(aggregate.stocks)
        totals = compute_income_expense_totals(aggregate.transactions)
        breakdown = compute_category_breakdown(aggregate.transactions)
        categories = [
            CategoryAmount(category=category, amount=amount)
            for category, amount in sorted(
                breakdown.items(),
                key=lambda item: (-item[1], item[0]),
            )
        ]
        return DashboardSummary(
            total_balance=total_balance,
            total_investments=total_investments,
            total_assets=total_balance + total_investments,
            totals=totals,
            categories=categories,
        )


__all__ = ["GetDashboardSummaryUseCase", "DashboardSummary"]
