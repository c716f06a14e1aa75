"""Port for the external identity provider."""

from collections.abc import Callable
from typing import Protocol

from src.domain.models.identity import Identity

IdentityCallback = Callable[[Identity | None], None]


class AuthenticationError(RuntimeError):
    """Raised when signing in or out fails."""


class IdentityProviderPort(Protocol):
    """Port notifying identity changes and handling sign in/out."""

    def on_identity_change(
        self,
        callback: IdentityCallback,
    ) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""

    def sign_in(self, *args, **kwargs) -> Identity:
        """Sign in and return the resolved identity.

        Raises:
            AuthenticationError: If sign in fails.
        """

    def sign_out(self) -> None:
        """Sign out the current identity.

        Raises:
            AuthenticationError: If sign out fails.
        """


__all__ = [
    "AuthenticationError",
    "IdentityCallback",
    "IdentityProviderPort",
]
