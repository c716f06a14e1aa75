"""Thread-based timers for debounced writes."""

from collections.abc import Callable
import threading

from src.application.ports.timers import TimerFactoryPort, TimerHandle


class ThreadingTimerFactory(TimerFactoryPort):
    """Schedule callbacks on daemon ``threading.Timer`` threads."""

    def schedule(
        self,
        delay_seconds: float,
        callback: Callable[[], None],
    ) -> TimerHandle:
        timer = threading.Timer(delay_seconds, callback)
        timer.daemon = True
        timer.start()
        return timer


__all__ = ["ThreadingTimerFactory"]
