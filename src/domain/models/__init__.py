"""Domain models package."""

from .accounts import Account, AccountDraft, AccountType
from .aggregate import DOCUMENT_FIELDS, FinanceAggregate
from .finance import CategoryAmount, DashboardSummary, IncomeExpenseTotals
from .identity import Identity
from .portfolio import (
    HoldingDraft,
    HoldingMetrics,
    Market,
    PortfolioTotals,
    StockHolding,
)
from .transactions import Transaction, TransactionDraft, TransactionType

__all__ = [
    "Account",
    "AccountDraft",
    "AccountType",
    "DOCUMENT_FIELDS",
    "FinanceAggregate",
    "CategoryAmount",
    "DashboardSummary",
    "IncomeExpenseTotals",
    "Identity",
    "HoldingDraft",
    "HoldingMetrics",
    "Market",
    "PortfolioTotals",
    "StockHolding",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
]
