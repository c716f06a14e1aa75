"""Use case to list transactions with their account labels."""

from dataclasses import dataclass

from src.domain.models import FinanceAggregate, Transaction
from src.domain.services.ledger import (
    filter_transactions,
    resolve_account_name,
)


@dataclass(frozen=True)
class TransactionRow:
    """A transaction with the display name of its account."""

    transaction: Transaction
    account_name: str


class ListTransactionsUseCase:
    """Filter transactions and resolve account names for display."""

    def execute(
        self,
        aggregate: FinanceAggregate,
        category: str | None = None,
        search: str | None = None,
    ) -> list[TransactionRow]:
        """Return matching transactions, newest first as stored.

        Args:
            aggregate: Current session aggregate.
            category: Category to keep; None or "ALL" keeps every category.
            search: Substring matched against description or amount.

        Returns:
            list[TransactionRow]: Rows with "Unknown account" for dangling
            account references.
        """
        return [
            TransactionRow(
                transaction=transaction,
                account_name=resolve_account_name(
                    transaction.account_id,
                    aggregate.accounts,
                ),
            )
            for transaction in filter_transactions(
                aggregate.transactions,
                category=category,
                search=search,
            )
        ]


__all__ = ["ListTransactionsUseCase", "TransactionRow"]
