"""Local identity provider used by the Streamlit interface and the CLI."""

from collections.abc import Callable
import threading
from typing import Optional

from src.application.ports.identity_provider import (
    AuthenticationError,
    IdentityCallback,
    IdentityProviderPort,
)
from src.domain.models.identity import Identity
from src.infrastructure.logging.logger import get_usage_logger


class LocalIdentityProvider(IdentityProviderPort):
    """Resolve identities from a user id typed at sign in.

    Subscribers are notified synchronously, and immediately on subscription
    with the identity currently signed in (None when signed out).
    """

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_usage_logger()
        self._lock = threading.Lock()
        self._callbacks: list[IdentityCallback] = []
        self._identity: Optional[Identity] = None

    @property
    def current(self) -> Optional[Identity]:
        return self._identity

    def on_identity_change(
        self,
        callback: IdentityCallback,
    ) -> Callable[[], None]:
        with self._lock:
            self._callbacks.append(callback)
            identity = self._identity

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        callback(identity)
        return _unsubscribe

    def sign_in(
        self,
        user_id: str,
        display_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Identity:
        """Sign in as ``user_id`` and notify subscribers.

        Raises:
            AuthenticationError: If the user id is blank.
        """
        cleaned = (user_id or "").strip()
        if not cleaned:
            raise AuthenticationError("A user id is required to sign in")
        identity = Identity.from_profile(
            cleaned,
            display_name=display_name,
            email=email,
        )
        self._logger.info(f"Sign in user_id={identity.id}")
        self._publish(identity)
        return identity

    def sign_out(self) -> None:
        identity = self._identity
        if identity is None:
            return
        self._logger.info(f"Sign out user_id={identity.id}")
        self._publish(None)

    def _publish(self, identity: Optional[Identity]) -> None:
        with self._lock:
            self._identity = identity
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(identity)


__all__ = ["LocalIdentityProvider"]
