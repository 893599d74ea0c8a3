"""Process-wide request statistics.

One ``Stat`` lives on the ``App`` for the lifetime of the process and is
incremented exactly once per dispatched request. All mutation happens
under a single lock; readers take a snapshot under the same lock.

Thread safety:
    Sync handlers run on worker threads and pounce may run several
    worker threads, so ``increment`` can be called concurrently. The
    lock serializes it; ``uptime`` reads only immutable state.
"""

import threading
import time
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

# Trailing windows, in minutes, exposed by ``snapshot()``
WINDOWS: dict[str, int] = {
    "last_minute": 1,
    "last_hour": 60,
    "last_day": 60 * 24,
    "last_week": 60 * 24 * 7,
}

_MAX_BUCKETS = WINDOWS["last_week"]


class Stat:
    """Request counter with per-status tallies and windowed totals.

    Usage::

        stat = Stat()
        stat.increment(200, 0.004)
        stat.snapshot()["requests"]  # {"200": 1}
    """

    __slots__ = (
        "_buckets",
        "_clock",
        "_lock",
        "_started",
        "requests",
        "started_at",
        "total_duration",
        "total_requests",
    )

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._lock = threading.Lock()
        self._clock = clock
        self._started = clock()
        self.started_at = datetime.now(UTC)
        self.total_requests = 0
        self.total_duration = 0.0
        self.requests: dict[str, int] = {}
        # (minute index, count), oldest first
        self._buckets: deque[list[int]] = deque(maxlen=_MAX_BUCKETS)

    def increment(self, status_code: int, duration: float) -> None:
        """Count one finished request with its final status and duration (seconds)."""
        status = str(status_code)
        with self._lock:
            minute = self._minute()
            self.total_requests += 1
            self.requests[status] = self.requests.get(status, 0) + 1
            self.total_duration += duration
            if self._buckets and self._buckets[-1][0] == minute:
                self._buckets[-1][1] += 1
            else:
                self._buckets.append([minute, 1])

    def uptime(self) -> timedelta:
        """Time elapsed since the counter was created."""
        return timedelta(seconds=self._clock() - self._started)

    def count_since(self, minutes: int) -> int:
        """Requests recorded in the trailing *minutes* whole-minute buckets."""
        with self._lock:
            return self._count_since(minutes)

    def snapshot(self) -> dict[str, Any]:
        """Consistent, JSON-ready copy of every counter."""
        with self._lock:
            total = self.total_requests
            data: dict[str, Any] = {
                "total_requests": total,
                "requests": dict(self.requests),
                "started_at": self.started_at.isoformat(),
                "uptime_seconds": round(self.uptime().total_seconds(), 3),
                "average_duration_ms": (
                    round(self.total_duration / total * 1000, 3) if total else 0.0
                ),
            }
            for name, minutes in WINDOWS.items():
                data[name] = self._count_since(minutes)
        return data

    def _minute(self) -> int:
        return int((self._clock() - self._started) // 60)

    def _count_since(self, minutes: int) -> int:
        # Caller holds the lock
        oldest = self._minute() - minutes + 1
        count = 0
        for minute, hits in reversed(self._buckets):
            if minute < oldest:
                break
            count += hits
        return count
