"""Cancellation tokens threaded through blocking network calls.

A token combines an optional deadline with an explicit ``cancel()`` switch.
Pipelines check it before each embed/upsert/query and derive per-request
timeouts from it, so one unresponsive dependency cannot hang a whole run.
"""

from __future__ import annotations

import threading
import time

from codevector.core.errors import OperationCancelledError


class CancellationToken:
    """Cooperative cancellation signal with an optional deadline."""

    def __init__(self, timeout_sec: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout_sec if timeout_sec is not None else None
        self._reason = "cancelled"

    @classmethod
    def none(cls) -> CancellationToken:
        """Token that never fires unless cancelled explicitly."""
        return cls()

    def cancel(self, reason: str = "cancelled") -> None:
        self._reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._reason = "timed out"
            return True
        return False

    @property
    def reason(self) -> str:
        return self._reason

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when unbounded."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def timeout(self, default: float) -> float:
        """Per-request timeout: the smaller of *default* and the time left."""
        left = self.remaining()
        if left is None:
            return default
        return min(default, left)

    def raise_if_cancelled(self, operation: str) -> None:
        if self.cancelled:
            raise OperationCancelledError.cancelled(operation, self._reason)
