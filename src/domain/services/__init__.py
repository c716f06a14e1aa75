"""Domain services package."""

from .advisory import AdvisorySnapshot, build_advisory_snapshot
from .ledger import (
    add_account,
    build_transaction,
    compute_category_breakdown,
    compute_income_expense_totals,
    compute_total_balance,
    filter_transactions,
    post_transaction,
    remove_account,
    resolve_account_name,
    update_account,
)
from .normalization import (
    match_suggested_category,
    new_identifier,
    normalize_category,
    normalize_symbol,
)
from .portfolio import (
    add_holding,
    compute_holding_metrics,
    compute_portfolio_totals,
    compute_total_investments,
    remove_holding,
    simulate_price_tick,
)
from .validation import (
    validate_account_draft,
    validate_holding_draft,
    validate_transaction_draft,
)

__all__ = [
    "AdvisorySnapshot",
    "build_advisory_snapshot",
    "add_account",
    "build_transaction",
    "compute_category_breakdown",
    "compute_income_expense_totals",
    "compute_total_balance",
    "filter_transactions",
    "post_transaction",
    "remove_account",
    "resolve_account_name",
    "update_account",
    "match_suggested_category",
    "new_identifier",
    "normalize_category",
    "normalize_symbol",
    "add_holding",
    "compute_holding_metrics",
    "compute_portfolio_totals",
    "compute_total_investments",
    "remove_holding",
    "simulate_price_tick",
    "validate_account_draft",
    "validate_holding_draft",
    "validate_transaction_draft",
]
