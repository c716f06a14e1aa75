"""Domain services for the ledger: balances, totals and postings.

Every function is pure: inputs are never mutated and new lists are returned.
"""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from decimal import Decimal
from logging import Logger

from src.domain.constants import UNKNOWN_ACCOUNT_LABEL
from src.domain.errors import UnknownAccountError
from src.domain.models import (
    Account,
    AccountDraft,
    IncomeExpenseTotals,
    Transaction,
    TransactionDraft,
    TransactionType,
)
from src.domain.services.normalization import (
    new_identifier,
    normalize_category,
)
from src.domain.services.validation import (
    validate_account_draft,
    validate_transaction_draft,
)


def compute_total_balance(
    accounts: Iterable[Account],
    logger: Logger | None = None,
) -> Decimal:
    """Sum account balances without currency conversion.

    Args:
        accounts: Accounts to total.
        logger: Optional logger warned when currencies are mixed.

    Returns:
        Decimal: Arithmetic sum of all balances.
    """
    total = Decimal("0")
    currencies: set[str] = set()
    for account in accounts:
        total += account.balance
        currencies.add(account.currency)
    if logger is not None and len(currencies) > 1:
        logger.warning(
            f"Total balance mixes currencies without conversion: "
            f"{sorted(currencies)}"
        )
    return total


def compute_income_expense_totals(
    transactions: Iterable[Transaction],
) -> IncomeExpenseTotals:
    """Sum income and expense amounts over the supplied transactions."""
    income_total = Decimal("0")
    expense_total = Decimal("0")
    for transaction in transactions:
        if transaction.type is TransactionType.INCOME:
            income_total += transaction.amount
        elif transaction.type is TransactionType.EXPENSE:
            expense_total += transaction.amount
    return IncomeExpenseTotals(
        income_total=income_total,
        expense_total=expense_total,
    )


def compute_category_breakdown(
    transactions: Iterable[Transaction],
) -> dict[str, Decimal]:
    """Sum expense amounts per category.

    Categories without any expense transaction are absent from the result.
    """
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type is not TransactionType.EXPENSE:
            continue
        totals[transaction.category] = (
            totals.get(transaction.category, Decimal("0"))
            + transaction.amount
        )
    return totals


def signed_amount(transaction: Transaction) -> Decimal:
    """Return the balance adjustment for a transaction.

    Income credits the account; every other type debits it.
    """
    if transaction.type is TransactionType.INCOME:
        return transaction.amount
    return -transaction.amount


def post_transaction(
    transaction: Transaction,
    accounts: Sequence[Account],
) -> list[Account]:
    """Return accounts with the owning account's balance adjusted.

    Args:
        transaction: Transaction being recorded.
        accounts: Current accounts; left untouched.

    Returns:
        list[Account]: New account list with exactly one balance changed.

    Raises:
        UnknownAccountError: If no account matches ``transaction.account_id``.
    """
    if not any(account.id == transaction.account_id for account in accounts):
        raise UnknownAccountError(transaction.account_id)
    adjustment = signed_amount(transaction)
    return [
        replace(account, balance=account.balance + adjustment)
        if account.id == transaction.account_id
        else account
        for account in accounts
    ]


def build_transaction(
    draft: TransactionDraft,
    transaction_id: str | None = None,
) -> Transaction:
    """Validate a draft and return the transaction to record."""
    amount, transaction_type = validate_transaction_draft(draft)
    return Transaction(
        id=transaction_id or new_identifier("tx"),
        account_id=draft.account_id.strip(),
        date=draft.date,
        amount=amount,
        type=transaction_type,
        category=normalize_category(draft.category),
        description=(draft.description or "").strip(),
    )


def resolve_account_name(
    account_id: str,
    accounts: Iterable[Account],
) -> str:
    """Return the account name, or a placeholder for dangling references."""
    for account in accounts:
        if account.id == account_id:
            return account.name
    return UNKNOWN_ACCOUNT_LABEL


def filter_transactions(
    transactions: Iterable[Transaction],
    category: str | None = None,
    search: str | None = None,
) -> list[Transaction]:
    """Filter transactions by category and a description/amount search.

    Args:
        transactions: Transactions in display order.
        category: Category to keep; None or "ALL" keeps every category.
        search: Substring matched against the description or the amount.

    Returns:
        list[Transaction]: Matching transactions, order preserved.
    """
    term = (search or "").strip().lower()
    filtered = []
    for transaction in transactions:
        if category and category != "ALL" and transaction.category != category:
            continue
        if term and not (
            term in transaction.description.lower()
            or term in str(transaction.amount)
        ):
            continue
        filtered.append(transaction)
    return filtered


def add_account(
    draft: AccountDraft,
    accounts: Sequence[Account],
    account_id: str | None = None,
) -> list[Account]:
    """Append a validated account with a fresh identifier."""
    name, account_type, balance, currency = validate_account_draft(draft)
    account = Account(
        id=account_id or new_identifier("acc"),
        name=name,
        type=account_type,
        balance=balance,
        currency=currency,
    )
    return [*accounts, account]


def update_account(
    account_id: str,
    draft: AccountDraft,
    accounts: Sequence[Account],
) -> list[Account]:
    """Replace the editable fields of an existing account.

    Raises:
        UnknownAccountError: If no account matches ``account_id``.
    """
    name, account_type, balance, currency = validate_account_draft(draft)
    if not any(account.id == account_id for account in accounts):
        raise UnknownAccountError(account_id)
    return [
        Account(
            id=account_id,
            name=name,
            type=account_type,
            balance=balance,
            currency=currency,
        )
        if account.id == account_id
        else account
        for account in accounts
    ]


def remove_account(
    account_id: str,
    accounts: Sequence[Account],
) -> list[Account]:
    """Drop an account; transactions referencing it are left dangling."""
    return [account for account in accounts if account.id != account_id]


__all__ = [
    "compute_total_balance",
    "compute_income_expense_totals",
    "compute_category_breakdown",
    "signed_amount",
    "post_transaction",
    "build_transaction",
    "resolve_account_name",
    "filter_transactions",
    "add_account",
    "update_account",
    "remove_account",
]
