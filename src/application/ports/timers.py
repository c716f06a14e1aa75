"""Port for scheduling delayed callbacks."""

from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """Handle returned for a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not started."""


class TimerFactoryPort(Protocol):
    """Port creating cancellable one-shot timers."""

    def schedule(
        self,
        delay_seconds: float,
        callback: Callable[[], None],
    ) -> TimerHandle:
        """Run ``callback`` once after ``delay_seconds``."""


__all__ = ["TimerHandle", "TimerFactoryPort"]
