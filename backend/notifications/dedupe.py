"""
Optional in-process dedupe window for redelivered coincidence events.

Database webhooks are delivered at least once, so the same coincidence may
arrive more than once. When a TTL is configured, a coincidence that was
already dispatched inside the window is not sent again.
"""

import threading
import time
from typing import Callable

from models.types import CoincidenceID


class RecentDeliveries:
    """Coincidence ids claimed within the last ttl_seconds."""

    def __init__(
        self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sent_at: dict[CoincidenceID, float] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def _prune(self, now: float) -> None:
        expired = [
            key for key, sent in self._sent_at.items() if now - sent >= self.ttl_seconds
        ]
        for key in expired:
            del self._sent_at[key]

    def seen(self, coincidencia_id: CoincidenceID) -> bool:
        """True if the coincidence was claimed inside the window."""
        if not self.enabled:
            return False
        with self._lock:
            self._prune(self._clock())
            return coincidencia_id in self._sent_at

    def claim(self, coincidencia_id: CoincidenceID) -> bool:
        """
        Mark a coincidence as in flight unless it is already claimed.

        Returns:
            True if the caller should dispatch, False for a redelivery
        """
        if not self.enabled:
            return True
        with self._lock:
            now = self._clock()
            self._prune(now)
            if coincidencia_id in self._sent_at:
                return False
            self._sent_at[coincidencia_id] = now
            return True

    def release(self, coincidencia_id: CoincidenceID) -> None:
        """Drop a claim so a failed invocation can be retried."""
        if not self.enabled:
            return
        with self._lock:
            self._sent_at.pop(coincidencia_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sent_at)
