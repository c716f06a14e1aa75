"""Application use cases package."""

from .finance_session import FinanceSession, SessionState
from .get_dashboard_summary import DashboardSummary, GetDashboardSummaryUseCase
from .get_portfolio_overview import (
    GetPortfolioOverviewUseCase,
    HoldingRow,
    PortfolioOverview,
)
from .list_transactions import ListTransactionsUseCase, TransactionRow
from .request_financial_analysis import (
    RequestFinancialAnalysisUseCase,
    SuggestCategoryUseCase,
)
from .write_scheduler import WriteScheduler

__all__ = [
    "FinanceSession",
    "SessionState",
    "DashboardSummary",
    "GetDashboardSummaryUseCase",
    "GetPortfolioOverviewUseCase",
    "HoldingRow",
    "PortfolioOverview",
    "ListTransactionsUseCase",
    "TransactionRow",
    "RequestFinancialAnalysisUseCase",
    "SuggestCategoryUseCase",
    "WriteScheduler",
]
