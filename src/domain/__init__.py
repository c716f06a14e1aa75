"""Domain package for ledger, portfolio and aggregate rules."""

from .constants import FALLBACK_CATEGORY, SUGGESTED_CATEGORIES
from .errors import (
    HoldingValidationError,
    SessionNotReadyError,
    UnknownAccountError,
    ValidationError,
)
from .models import (
    Account,
    AccountType,
    FinanceAggregate,
    Identity,
    StockHolding,
    Transaction,
    TransactionType,
)
from .sample_data import build_sample_aggregate
from .services import (
    add_holding,
    compute_category_breakdown,
    compute_holding_metrics,
    compute_income_expense_totals,
    compute_portfolio_totals,
    compute_total_balance,
    post_transaction,
    simulate_price_tick,
)

__all__ = [
    "FALLBACK_CATEGORY",
    "SUGGESTED_CATEGORIES",
    "HoldingValidationError",
    "SessionNotReadyError",
    "UnknownAccountError",
    "ValidationError",
    "Account",
    "AccountType",
    "FinanceAggregate",
    "Identity",
    "StockHolding",
    "Transaction",
    "TransactionType",
    "build_sample_aggregate",
    "add_holding",
    "compute_category_breakdown",
    "compute_holding_metrics",
    "compute_income_expense_totals",
    "compute_portfolio_totals",
    "compute_total_balance",
    "post_transaction",
    "simulate_price_tick",
]
