"""The per-identity aggregate of accounts, transactions and holdings."""

from dataclasses import dataclass, field
from typing import Any

from .accounts import Account
from .portfolio import StockHolding
from .transactions import Transaction


DOCUMENT_FIELDS = ("accounts", "transactions", "stocks")


@dataclass(frozen=True)
class FinanceAggregate:
    """Accounts, transactions and stock holdings owned by one identity.

    The aggregate is the persistence unit: it is read and written as a single
    document with exactly the fields in ``DOCUMENT_FIELDS``.
    """

    accounts: tuple[Account, ...] = field(default_factory=tuple)
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    stocks: tuple[StockHolding, ...] = field(default_factory=tuple)

    def to_document(self) -> dict[str, list[dict[str, Any]]]:
        """Return the storage representation of the aggregate."""
        return {
            "accounts": [item.to_document() for item in self.accounts],
            "transactions": [
                item.to_document() for item in self.transactions
            ],
            "stocks": [item.to_document() for item in self.stocks],
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "FinanceAggregate":
        """Build an aggregate from a stored document.

        Missing or null fields load as empty collections.
        """
        return cls(
            accounts=tuple(
                Account.from_document(item)
                for item in data.get("accounts") or []
            ),
            transactions=tuple(
                Transaction.from_document(item)
                for item in data.get("transactions") or []
            ),
            stocks=tuple(
                StockHolding.from_document(item)
                for item in data.get("stocks") or []
            ),
        )


__all__ = ["FinanceAggregate", "DOCUMENT_FIELDS"]
