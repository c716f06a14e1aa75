"""Domain helpers for summarizing the aggregate sent to the advisor."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from src.domain.models import FinanceAggregate
from src.domain.services.ledger import compute_total_balance
from src.domain.services.portfolio import compute_total_investments

TOP_HOLDINGS_LIMIT = 5
RECENT_TRANSACTIONS_LIMIT = 10


@dataclass(frozen=True)
class AdvisorySnapshot:
    """Compact view of the aggregate, small enough for a prompt."""

    total_cash: Decimal
    accounts: list[tuple[str, Decimal]]
    portfolio_value: Decimal
    top_holdings: list[str]
    recent_transactions: list[dict[str, Any]]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of the snapshot."""
        return {
            "totalCash": float(self.total_cash),
            "accounts": [
                {"name": name, "balance": float(balance)}
                for name, balance in self.accounts
            ],
            "portfolioValue": float(self.portfolio_value),
            "topHoldings": list(self.top_holdings),
            "recentTransactions": [
                {
                    key: float(value) if isinstance(value, Decimal) else value
                    for key, value in item.items()
                }
                for item in self.recent_transactions
            ],
        }


def build_advisory_snapshot(aggregate: FinanceAggregate) -> AdvisorySnapshot:
    """Summarize the aggregate for the advisory service.

    Args:
        aggregate: Current session aggregate.

    Returns:
        AdvisorySnapshot: Cash and portfolio totals, the first holdings and
        the most recent transactions.
    """
    return AdvisorySnapshot(
        total_cash=compute_total_balance(aggregate.accounts),
        accounts=[
            (account.name, account.balance) for account in aggregate.accounts
        ],
        portfolio_value=compute_total_investments(aggregate.stocks),
        top_holdings=[
            holding.symbol
            for holding in aggregate.stocks[:TOP_HOLDINGS_LIMIT]
        ],
        recent_transactions=[
            transaction.to_document()
            for transaction in aggregate.transactions[
                :RECENT_TRANSACTIONS_LIMIT
            ]
        ],
    )


__all__ = ["AdvisorySnapshot", "build_advisory_snapshot"]
