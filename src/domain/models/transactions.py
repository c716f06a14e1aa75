"""Domain models for ledger transactions."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from src.domain.errors import TransactionValidationError
from src.utils.decimal_utils import coerce_decimal


class TransactionType(str, Enum):
    """Direction of a transaction; the amount itself is unsigned."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"

    @classmethod
    def parse(cls, value: "TransactionType | str") -> "TransactionType":
        if isinstance(value, cls):
            return value
        cleaned = str(value or "").strip().upper()
        try:
            return cls(cleaned)
        except ValueError as exc:
            raise TransactionValidationError(
                f"Unknown transaction type: {value!r}"
            ) from exc


@dataclass(frozen=True)
class Transaction:
    """An immutable income, expense or transfer record.

    Attributes:
        id: Unique identifier.
        account_id: Owning account; may dangle after the account is removed.
        date: Calendar date of the transaction.
        amount: Unsigned amount, the sign comes from ``type``.
        type: Transaction direction.
        category: Free-form category label.
        description: Free text.
    """

    id: str
    account_id: str
    date: date
    amount: Decimal
    type: TransactionType
    category: str
    description: str

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "accountId": self.account_id,
            "date": self.date.isoformat(),
            "amount": self.amount,
            "type": self.type.value,
            "category": self.category,
            "description": self.description,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "Transaction":
        raw_date = data.get("date")
        return cls(
            id=str(data["id"]),
            account_id=str(data.get("accountId", "")),
            date=(
                raw_date
                if isinstance(raw_date, date)
                else date.fromisoformat(str(raw_date)[:10])
            ),
            amount=coerce_decimal(data.get("amount")),
            type=TransactionType.parse(data.get("type", "")),
            category=str(data.get("category", "")),
            description=str(data.get("description", "")),
        )


@dataclass(frozen=True)
class TransactionDraft:
    """User input for recording a new transaction."""

    account_id: str
    date: date
    amount: Decimal | int | float | str
    type: TransactionType | str
    category: str = ""
    description: str = ""


__all__ = ["TransactionType", "Transaction", "TransactionDraft"]
