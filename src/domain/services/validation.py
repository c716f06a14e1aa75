"""Domain validation helpers.

Drafts are validated before any collection is touched, so a rejected input
never leaves a partial change behind.
"""

from decimal import Decimal, InvalidOperation

from src.domain.errors import (
    AccountValidationError,
    HoldingValidationError,
    TransactionValidationError,
)
from src.domain.models import (
    AccountDraft,
    AccountType,
    HoldingDraft,
    Market,
    TransactionDraft,
    TransactionType,
)
from src.domain.services.normalization import normalize_symbol
from src.utils.decimal_utils import coerce_decimal


def _to_decimal(value, field: str, error_cls) -> Decimal | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = coerce_decimal(value)
    except (InvalidOperation, ValueError) as exc:
        raise error_cls(f"{field} must be a number, got {value!r}") from exc
    if not number.is_finite():
        raise error_cls(f"{field} must be a finite number, got {value!r}")
    return number


def validate_account_draft(
    draft: AccountDraft,
) -> tuple[str, AccountType, Decimal, str]:
    """Validate an account draft.

    Returns:
        tuple: Cleaned name, type, balance and currency.

    Raises:
        AccountValidationError: If the name or currency is blank, the type is
            unknown or the balance is not a number.
    """
    name = (draft.name or "").strip()
    if not name:
        raise AccountValidationError("Account name is required")
    account_type = AccountType.parse(draft.type)
    balance = _to_decimal(draft.balance, "balance", AccountValidationError)
    currency = (draft.currency or "").strip().upper()
    if not currency:
        raise AccountValidationError("Currency is required")
    return name, account_type, balance or Decimal("0"), currency


def validate_transaction_draft(
    draft: TransactionDraft,
) -> tuple[Decimal, TransactionType]:
    """Validate a transaction draft.

    Returns:
        tuple: Amount and transaction type.

    Raises:
        TransactionValidationError: If the account, date or a positive amount
            is missing, or the type is unknown.
    """
    if not (draft.account_id or "").strip():
        raise TransactionValidationError("Account is required")
    if draft.date is None:
        raise TransactionValidationError("Date is required")
    amount = _to_decimal(draft.amount, "amount", TransactionValidationError)
    if amount is None or amount <= 0:
        raise TransactionValidationError("Amount must be greater than zero")
    return amount, TransactionType.parse(draft.type)


def validate_holding_draft(
    draft: HoldingDraft,
) -> tuple[str, Decimal, Decimal, Market]:
    """Validate a partial holding.

    Returns:
        tuple: Normalized symbol, shares, average cost and market.

    Raises:
        HoldingValidationError: If the symbol is missing or shares/average
            cost are missing or not strictly positive.
    """
    symbol = normalize_symbol(draft.symbol)
    if symbol is None:
        raise HoldingValidationError("Symbol is required")
    shares = _to_decimal(draft.shares, "shares", HoldingValidationError)
    if shares is None or shares <= 0:
        raise HoldingValidationError("Shares must be greater than zero")
    avg_cost = _to_decimal(draft.avg_cost, "avg_cost", HoldingValidationError)
    if avg_cost is None or avg_cost <= 0:
        raise HoldingValidationError("Average cost must be greater than zero")
    return symbol, shares, avg_cost, Market.parse(draft.market)


__all__ = [
    "validate_account_draft",
    "validate_transaction_draft",
    "validate_holding_draft",
]
