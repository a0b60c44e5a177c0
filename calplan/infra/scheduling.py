"""Cancelable delayed calls used by the autosave controller."""
import threading
from typing import Callable, Protocol


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


class ThreadingScheduler:
    """Runs callbacks on daemon threading.Timer threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer
