"""Deadline and cancellation token threaded through every blocking wait.

A ``Deadline`` bounds an aggregation call in wall-clock time and can be
cancelled from another thread (a UI closing its log view, a signal
handler).  Poll waits go through :meth:`Deadline.sleep` so cancellation
interrupts them immediately.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from pipelogs.core.errors import DeadlineExceededError


class Deadline:
    """Wall-clock bound plus cancellation flag.

    Parameters
    ----------
    timeout:
        Seconds until the deadline expires.  ``None`` never expires; the
        deadline can still be cancelled.
    clock:
        Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        timeout: float | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._expires_at = None if timeout is None else clock() + timeout
        self._cancelled = threading.Event()

    @classmethod
    def never(cls) -> Deadline:
        """A deadline that only ends through :meth:`cancel`."""
        return cls(None)

    def remaining(self) -> float | None:
        """Seconds left, ``0.0`` once expired, ``None`` when unbounded."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        if self._cancelled.is_set():
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Cancel the deadline; waiters wake up and raise."""
        self._cancelled.set()

    def check(self, action: str, *, found_logs: bool = False) -> None:
        """Raise ``DeadlineExceededError`` if the deadline has ended."""
        if self._cancelled.is_set():
            raise DeadlineExceededError(
                f"cancelled while {action}", found_logs=found_logs
            )
        if self.expired:
            raise DeadlineExceededError(
                f"deadline exceeded while {action}", found_logs=found_logs
            )

    def sleep(self, seconds: float, *, action: str = "waiting") -> None:
        """Sleep up to *seconds*, cut short by expiry or cancellation."""
        self.check(action)
        remaining = self.remaining()
        wait_for = seconds if remaining is None else min(seconds, remaining)
        if wait_for > 0:
            self._cancelled.wait(wait_for)
        self.check(action)
