# (c) Nelen & Schuurmans

import threading
import time

from .exceptions import Cancelled
from .exceptions import DeadlineExceeded

__all__ = ["CancelToken"]


class CancelToken:
    """Cancellation and deadline signal that a caller hands to a listing.

    The token is checked before every request. It may be cancelled from another
    thread; a request that is already in flight is bounded by its own timeout,
    which is capped by the remaining time until the deadline.

    Args:
        timeout: Seconds from now until the deadline. None means no deadline.
    """

    def __init__(self, timeout: float | None = None):
        self._event = threading.Event()
        self.deadline = None if timeout is None else time.monotonic() + timeout

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def remaining(self) -> float | None:
        """Seconds left until the deadline (never negative)"""
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def timeout_for(self, default: float) -> float:
        remaining = self.remaining()
        if remaining is None:
            return default
        return min(default, remaining)

    def check(self) -> None:
        if self.cancelled:
            raise Cancelled()
        if self.remaining() == 0.0:
            raise DeadlineExceeded()
