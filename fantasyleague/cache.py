"""A small thread-safe in-memory cache of authenticated principals."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from fantasyleague.models import Principal


@dataclass(frozen=True)
class _Entry:
    principal: Principal
    expires_at: float


class PrincipalCache:
    """Principals keyed by string, each kept for ``ttl`` seconds.

    When ``max_entries`` is positive and the cache is full, expired entries are
    dropped first, then the oldest remaining entry if still full.
    """

    def __init__(
        self,
        ttl: float,
        max_entries: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def get(self, key: str) -> Optional[Principal]:
        """Return the cached principal for ``key``, or None when absent or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= now:
                del self._entries[key]
                return None
            return entry.principal

    def set(self, key: str, principal: Principal) -> None:
        """Store ``principal`` under ``key``; does nothing when the TTL is not positive."""
        if self._ttl <= 0:
            return
        now = self._clock()
        with self._lock:
            if self._max_entries > 0 and len(self._entries) >= self._max_entries:
                self._evict_expired(now)
                if len(self._entries) >= self._max_entries:
                    self._evict_one()
            self._entries[key] = _Entry(principal=principal, expires_at=now + self._ttl)

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]

    def _evict_one(self) -> None:
        oldest = next(iter(self._entries), None)
        if oldest is not None:
            del self._entries[oldest]