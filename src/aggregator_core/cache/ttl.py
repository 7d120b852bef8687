"""In-memory TTL cache for upstream responses.

Entries expire lazily: staleness is only checked when a key is read, so
there is no background sweep. Keys written once and never read again stay
in memory until the process exits, unless ``max_entries`` is set.

Each uvicorn worker owns its own instances; nothing here is shared across
processes.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any


class Miss:
    """Sentinel type returned by :meth:`ResponseCache.get` for absent or stale keys."""

    _instance: Miss | None = None

    def __new__(cls) -> Miss:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISS"


MISS = Miss()


class ResponseCache:
    """Dict + monotonic clock TTL cache guarded by a single lock."""

    def __init__(
        self,
        ttl_seconds: float = 30.0,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._store: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | Miss:
        """Return the cached value, or ``MISS`` if absent or expired.

        An expired entry is removed as a side effect.
        """
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return MISS
            stored_at, value = entry
            if self._clock() - stored_at >= self._ttl:
                del self._store[key]
                return MISS
            return value

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* stamped with the current time."""
        with self._lock:
            self._store.pop(key, None)
            self._store[key] = (self._clock(), value)
            if self._max_entries is not None:
                # Oldest insertion goes first
                while len(self._store) > self._max_entries:
                    self._store.popitem(last=False)

    def invalidate(self, key: str) -> None:
        """Remove a single key (no-op if absent)."""
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._store.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not MISS

    def __len__(self) -> int:
        # Counts stored entries, including expired ones not yet read
        with self._lock:
            return len(self._store)
