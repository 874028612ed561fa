"""Time-boxed cache for the last system integrity scan.

The scan walks every content record, so the API serves a recent result
instead of rescanning on each dashboard refresh. This cache belongs to the
HTTP boundary; the analyzer itself never caches.
"""

import time
from collections.abc import Callable

from template_guard.strategies.consistency.models import IntegrityStatus


class IntegrityScanCache:
    """Holds one IntegrityStatus for ``ttl_seconds``."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._status: IntegrityStatus | None = None
        self._stored_at = 0.0

    def get(self) -> IntegrityStatus | None:
        """Return the cached scan if it is still fresh."""
        if self._status is None or self._ttl <= 0:
            return None
        if self._clock() - self._stored_at >= self._ttl:
            self._status = None
            return None
        return self._status

    def set(self, status: IntegrityStatus) -> None:
        self._status = status
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._status = None
