"""Domain models for ledger aggregates shown on the dashboard."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class IncomeExpenseTotals:
    """Income and expense sums over a set of transactions."""

    income_total: Decimal
    expense_total: Decimal

    @property
    def net(self) -> Decimal:
        """Return income_total minus expense_total."""
        return self.income_total - self.expense_total


@dataclass(frozen=True)
class CategoryAmount:
    """Expense amount aggregated for a category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for the dashboard.

    Attributes:
        total_balance: Sum of account balances, mixed currencies included.
        total_investments: Market value of all holdings.
        total_assets: Cash balance plus investments.
        totals: Income and expense sums.
        categories: Expense breakdown, largest first.
    """

    total_balance: Decimal
    total_investments: Decimal
    total_assets: Decimal
    totals: IncomeExpenseTotals
    categories: list[CategoryAmount]


__all__ = ["IncomeExpenseTotals", "CategoryAmount", "DashboardSummary"]
