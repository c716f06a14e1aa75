"""Debounced write scheduling for the finance document."""

from collections.abc import Callable
import threading

from src.application.ports.timers import TimerFactoryPort, TimerHandle
from src.application.use_cases.constants import DEFAULT_SAVE_DEBOUNCE_SECONDS


class WriteScheduler:
    """Collapse bursts of mutations into a single delayed write.

    Each ``notify_mutated`` call cancels the pending timer and starts a new
    one, so the write only runs after ``delay_seconds`` without mutations.
    """

    def __init__(
        self,
        write: Callable[[], None],
        timer_factory: TimerFactoryPort,
        delay_seconds: float = DEFAULT_SAVE_DEBOUNCE_SECONDS,
    ) -> None:
        """Initialize the scheduler.

        Args:
            write: Callable performing the write; runs on the timer thread.
            timer_factory: Port creating cancellable timers.
            delay_seconds: Quiet period required before writing.
        """
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be non-negative")
        self._write = write
        self._timer_factory = timer_factory
        self._delay_seconds = delay_seconds
        self._lock = threading.Lock()
        self._handle: TimerHandle | None = None
        self._generation = 0

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    @property
    def has_pending_write(self) -> bool:
        with self._lock:
            return self._handle is not None

    def notify_mutated(self) -> None:
        """Schedule a write, replacing any write still pending."""
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._generation += 1
            generation = self._generation
            self._handle = self._timer_factory.schedule(
                self._delay_seconds,
                lambda: self._fire(generation),
            )

    def cancel(self) -> bool:
        """Drop the pending write without running it.

        Returns:
            bool: True when a pending write was abandoned.
        """
        with self._lock:
            return self._drop_pending()

    def flush(self) -> bool:
        """Run the pending write immediately.

        Returns:
            bool: True when a pending write was run.
        """
        with self._lock:
            pending = self._drop_pending()
        if pending:
            self._write()
        return pending

    def _drop_pending(self) -> bool:
        pending = self._handle is not None
        if pending:
            self._handle.cancel()
            self._handle = None
        self._generation += 1
        return pending

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A timer that lost a cancel race must not write.
            if generation != self._generation or self._handle is None:
                return
            self._handle = None
        self._write()


__all__ = ["WriteScheduler"]
