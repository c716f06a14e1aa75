"""Domain models for bank, credit and cash accounts."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from src.domain.errors import AccountValidationError
from src.utils.decimal_utils import coerce_decimal


class AccountType(str, Enum):
    """Closed set of account kinds."""

    CHECKING = "Checking"
    SAVINGS = "Savings"
    CREDIT = "Credit"
    INVESTMENT = "Investment"
    CASH = "Cash"

    @classmethod
    def parse(cls, value: "AccountType | str") -> "AccountType":
        """Return the enum member for a raw value, case-insensitively.

        Raises:
            AccountValidationError: If the value is not a known account type.
        """
        if isinstance(value, cls):
            return value
        cleaned = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == cleaned or member.name.lower() == cleaned:
                return member
        raise AccountValidationError(f"Unknown account type: {value!r}")


@dataclass(frozen=True)
class Account:
    """A bank, credit or cash account with a stored running balance.

    Attributes:
        id: Stable unique identifier.
        name: Display name.
        type: Account kind.
        balance: Signed running total, mutated only by edits and postings.
        currency: Free-form currency code, never converted.
    """

    id: str
    name: str
    type: AccountType
    balance: Decimal
    currency: str

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "balance": self.balance,
            "currency": self.currency,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "Account":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            type=AccountType.parse(data.get("type", "")),
            balance=coerce_decimal(data.get("balance")),
            currency=str(data.get("currency", "")),
        )


@dataclass(frozen=True)
class AccountDraft:
    """User input for creating or editing an account."""

    name: str
    type: AccountType | str
    balance: Decimal | int | float | str
    currency: str


__all__ = ["AccountType", "Account", "AccountDraft"]
