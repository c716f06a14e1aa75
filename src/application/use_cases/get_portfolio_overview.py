"""Use case to value every holding of the portfolio."""

from dataclasses import dataclass

from src.domain.models import (
    FinanceAggregate,
    HoldingMetrics,
    PortfolioTotals,
    StockHolding,
)
from src.domain.services.portfolio import (
    compute_holding_metrics,
    compute_portfolio_totals,
)


@dataclass(frozen=True)
class HoldingRow:
    """A holding with its derived valuation."""

    holding: StockHolding
    metrics: HoldingMetrics


@dataclass(frozen=True)
class PortfolioOverview:
    """Per-holding rows and portfolio totals."""

    rows: list[HoldingRow]
    totals: PortfolioTotals


class GetPortfolioOverviewUseCase:
    """Compute holding metrics and totals for display."""

    def execute(self, aggregate: FinanceAggregate) -> PortfolioOverview:
        """Return the portfolio overview, holdings in stored order."""
        rows = [
            HoldingRow(holding=holding, metrics=compute_holding_metrics(holding))
            for holding in aggregate.stocks
        ]
        return PortfolioOverview(
            rows=rows,
            totals=compute_portfolio_totals(aggregate.stocks),
        )


__all__ = ["GetPortfolioOverviewUseCase", "PortfolioOverview", "HoldingRow"]
