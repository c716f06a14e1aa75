"""Domain exceptions."""


class WealthFlowError(Exception):
    """Base class for WealthFlow domain errors."""


class ValidationError(WealthFlowError):
    """Raised when user input is malformed; state is left untouched."""


class AccountValidationError(ValidationError):
    """Raised when an account draft is missing required fields."""


class TransactionValidationError(ValidationError):
    """Raised when a transaction draft is malformed."""


class HoldingValidationError(ValidationError):
    """Raised when a stock holding draft is malformed."""


class UnknownAccountError(WealthFlowError):
    """Raised when a transaction references an account that does not exist."""

    def __init__(self, account_id: str) -> None:
        super().__init__(f"No account with id={account_id!r}")
        self.account_id = account_id


class SessionNotReadyError(WealthFlowError):
    """Raised when the aggregate is mutated outside of a ready session."""


__all__ = [
    "WealthFlowError",
    "ValidationError",
    "AccountValidationError",
    "TransactionValidationError",
    "HoldingValidationError",
    "UnknownAccountError",
    "SessionNotReadyError",
]
