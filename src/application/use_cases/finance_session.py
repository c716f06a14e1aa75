"""Session controller owning the finance aggregate of the signed-in identity.

The session follows a small state machine:

* ``UNAUTHENTICATED``: no identity, empty aggregate, mutations rejected;
* ``LOADING``: an identity resolved and its document is being read;
* ``READY``: the aggregate is loaded and every mutation schedules a
  debounced merge write of the whole aggregate.

Signing out discards the aggregate. A write still waiting for its debounce
delay at that moment is abandoned and logged.
"""

from collections.abc import Callable
from dataclasses import replace
from decimal import InvalidOperation
from enum import Enum
import random
import threading
import time

from src.application.ports.document_store import (
    DocumentStoreError,
    DocumentStorePort,
)
from src.application.ports.identity_provider import IdentityProviderPort
from src.application.ports.timers import TimerFactoryPort
from src.application.use_cases.constants import DEFAULT_SAVE_DEBOUNCE_SECONDS
from src.application.use_cases.write_scheduler import WriteScheduler
from src.domain.errors import SessionNotReadyError, WealthFlowError
from src.domain.models import (
    Account,
    AccountDraft,
    FinanceAggregate,
    HoldingDraft,
    Identity,
    StockHolding,
    Transaction,
    TransactionDraft,
)
from src.domain.sample_data import build_sample_aggregate
from src.domain.services import ledger, portfolio
from src.infrastructure.logging.logger import get_app_logger


class SessionState(str, Enum):
    """Lifecycle states of a finance session."""

    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"
    READY = "ready"


class FinanceSession:
    """Own the aggregate for one identity at a time and keep it persisted."""

    def __init__(
        self,
        document_store: DocumentStorePort,
        timer_factory: TimerFactoryPort,
        logger=None,
        debounce_seconds: float = DEFAULT_SAVE_DEBOUNCE_SECONDS,
        sample_factory: Callable[[], FinanceAggregate] = build_sample_aggregate,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        """Initialize the session.

        Args:
            document_store: Port reading and merge-writing documents.
            timer_factory: Port creating the debounce timers.
            logger: Optional logger compatible with logging.Logger-like API.
            debounce_seconds: Quiet period before a write is sent.
            sample_factory: Builds the dataset seeded for new identities.
            clock: Nanosecond clock used for last-write-wins revisions.
        """
        self._store = document_store
        self._timer_factory = timer_factory
        self._logger = logger or get_app_logger()
        self._debounce_seconds = debounce_seconds
        self._sample_factory = sample_factory
        self._clock = clock
        self._lock = threading.RLock()
        self._state = SessionState.UNAUTHENTICATED
        self._identity: Identity | None = None
        self._aggregate = FinanceAggregate()
        self._scheduler: WriteScheduler | None = None
        self._load_failed = False
        self._last_revision = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def aggregate(self) -> FinanceAggregate:
        return self._aggregate

    @property
    def load_failed(self) -> bool:
        return self._load_failed

    @property
    def has_pending_write(self) -> bool:
        scheduler = self._scheduler
        return scheduler is not None and scheduler.has_pending_write

    def bind(self, provider: IdentityProviderPort) -> Callable[[], None]:
        """Follow identity changes reported by the provider.

        Returns:
            Callable[[], None]: Function detaching the session.
        """
        return provider.on_identity_change(self.handle_identity_change)

    def handle_identity_change(self, identity: Identity | None) -> None:
        """React to the identity provider resolving or clearing an identity.

        Args:
            identity: Newly resolved identity, or None after sign out.
        """
        if identity is None:
            self._end_session()
            return
        current = self._identity
        if current is not None and current.id == identity.id:
            with self._lock:
                self._identity = identity
            return
        if current is not None:
            self._end_session()
        self._start_session(identity)

    def add_account(self, draft: AccountDraft) -> Account:
        """Create an account from user input."""
        updated = self._apply(
            lambda aggregate: replace(
                aggregate,
                accounts=tuple(ledger.add_account(draft, aggregate.accounts)),
            )
        )
        return updated.accounts[-1]

    def update_account(self, account_id: str, draft: AccountDraft) -> Account:
        """Apply an explicit user edit to an account, balance included."""
        updated = self._apply(
            lambda aggregate: replace(
                aggregate,
                accounts=tuple(
                    ledger.update_account(
                        account_id,
                        draft,
                        aggregate.accounts,
                    )
                ),
            )
        )
        return next(item for item in updated.accounts if item.id == account_id)

    def remove_account(self, account_id: str) -> None:
        """Delete an account; its transactions keep a dangling reference."""
        self._apply(
            lambda aggregate: replace(
                aggregate,
                accounts=tuple(
                    ledger.remove_account(account_id, aggregate.accounts)
                ),
            )
        )

    def record_transaction(self, draft: TransactionDraft) -> Transaction:
        """Record a transaction and post it to its account.

        The new transaction and the adjusted account replace the aggregate in
        a single swap; on any error neither is applied.

        Raises:
            TransactionValidationError: If the draft is malformed.
            UnknownAccountError: If the draft references no existing account.
        """
        def _post(aggregate: FinanceAggregate) -> FinanceAggregate:
            transaction = ledger.build_transaction(draft)
            accounts = ledger.post_transaction(transaction, aggregate.accounts)
            return replace(
                aggregate,
                accounts=tuple(accounts),
                transactions=(transaction, *aggregate.transactions),
            )

        transaction = self._apply(_post).transactions[0]
        self._logger.info(
            f"Recorded {transaction.type.value} transaction "
            f"{transaction.id} on account {transaction.account_id}"
        )
        return transaction

    def add_holding(self, draft: HoldingDraft) -> StockHolding:
        """Add a stock holding at breakeven."""
        updated = self._apply(
            lambda aggregate: replace(
                aggregate,
                stocks=tuple(portfolio.add_holding(draft, aggregate.stocks)),
            )
        )
        return updated.stocks[-1]

    def remove_holding(self, holding_id: str) -> None:
        """Delete a stock holding."""
        self._apply(
            lambda aggregate: replace(
                aggregate,
                stocks=tuple(
                    portfolio.remove_holding(holding_id, aggregate.stocks)
                ),
            )
        )

    def refresh_prices(
        self,
        rng: random.Random | None = None,
    ) -> tuple[StockHolding, ...]:
        """Apply one simulated market tick to every holding."""
        updated = self._apply(
            lambda aggregate: replace(
                aggregate,
                stocks=tuple(
                    portfolio.simulate_price_tick(aggregate.stocks, rng)
                ),
            )
        )
        return updated.stocks

    def flush(self) -> bool:
        """Send the pending write now instead of waiting for the delay.

        Returns:
            bool: True when a pending write was sent.
        """
        scheduler = self._scheduler
        if scheduler is None:
            return False
        return scheduler.flush()

    def _apply(
        self,
        mutate: Callable[[FinanceAggregate], FinanceAggregate],
    ) -> FinanceAggregate:
        with self._lock:
            if self._state is not SessionState.READY:
                raise SessionNotReadyError(
                    f"Cannot modify data while session is {self._state.value}"
                )
            updated = mutate(self._aggregate)
            self._aggregate = updated
            scheduler = self._scheduler
        scheduler.notify_mutated()
        return updated

    def _start_session(self, identity: Identity) -> None:
        with self._lock:
            self._identity = identity
            self._state = SessionState.LOADING
            self._aggregate = FinanceAggregate()
            self._load_failed = False
            self._scheduler = WriteScheduler(
                write=lambda: self._write_current(identity.id),
                timer_factory=self._timer_factory,
                delay_seconds=self._debounce_seconds,
            )
        self._logger.info(f"Loading finance data for user_id={identity.id}")

        aggregate, load_failed = self._load(identity.id)

        with self._lock:
            if self._identity is not identity:
                self._logger.warning(
                    f"Discarding data loaded for user_id={identity.id}; "
                    "identity changed while loading"
                )
                return
            self._aggregate = aggregate
            self._load_failed = load_failed
            self._state = SessionState.READY
        self._logger.info(
            f"Session ready for user_id={identity.id}: "
            f"{len(aggregate.accounts)} accounts, "
            f"{len(aggregate.transactions)} transactions, "
            f"{len(aggregate.stocks)} holdings"
        )

    def _end_session(self) -> None:
        with self._lock:
            identity = self._identity
            scheduler = self._scheduler
            self._identity = None
            self._scheduler = None
            self._aggregate = FinanceAggregate()
            self._load_failed = False
            self._state = SessionState.UNAUTHENTICATED
        if identity is None:
            return
        if scheduler is not None and scheduler.cancel():
            self._logger.warning(
                f"Abandoned unsaved changes for user_id={identity.id} "
                "on sign out"
            )
        self._logger.info(f"Session closed for user_id={identity.id}")

    def _load(self, user_id: str) -> tuple[FinanceAggregate, bool]:
        """Read the user's aggregate, seeding it when none is stored.

        Returns:
            tuple: The loaded aggregate and whether loading failed.
        """
        try:
            document = self._store.read(user_id)
        except DocumentStoreError as exc:
            self._logger.error(
                f"Failed to load finance data for user_id={user_id}: {exc}"
            )
            return FinanceAggregate(), True

        if document is None:
            seed = self._sample_factory()
            self._logger.info(
                f"No document for user_id={user_id}; "
                "seeding demonstration data"
            )
            self._write_document(user_id, seed)
            return seed, False

        try:
            return FinanceAggregate.from_document(document), False
        except (
            KeyError,
            TypeError,
            ValueError,
            InvalidOperation,
            WealthFlowError,
        ) as exc:
            self._logger.error(
                f"Stored document for user_id={user_id} is malformed: {exc}"
            )
            return FinanceAggregate(), True

    def _write_current(self, user_id: str) -> None:
        with self._lock:
            identity = self._identity
            if identity is None or identity.id != user_id:
                return
            if self._load_failed:
                self._logger.warning(
                    f"Skipping save for user_id={user_id}: "
                    "stored data could not be loaded"
                )
                return
            aggregate = self._aggregate
        self._write_document(user_id, aggregate)

    def _write_document(
        self,
        user_id: str,
        aggregate: FinanceAggregate,
    ) -> bool:
        revision = self._next_revision()
        try:
            applied = self._store.write(
                user_id,
                aggregate.to_document(),
                revision=revision,
                merge=True,
            )
        except DocumentStoreError as exc:
            self._logger.error(
                f"Failed to save finance data for user_id={user_id}: {exc}"
            )
            return False
        except Exception as exc:
            self._logger.error(
                f"Unexpected error saving finance data for user_id={user_id}: "
                f"{type(exc).__name__}: {exc}"
            )
            return False
        if applied:
            self._logger.info(
                f"Saved finance data for user_id={user_id} "
                f"(revision={revision})"
            )
        else:
            self._logger.warning(
                f"Store ignored stale write for user_id={user_id} "
                f"(revision={revision})"
            )
        return applied

    def _next_revision(self) -> int:
        with self._lock:
            revision = max(self._clock(), self._last_revision + 1)
            self._last_revision = revision
            return revision


__all__ = ["FinanceSession", "SessionState"]
