"""In-memory cache with per-entry expiry for market data lookups."""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .config import DEFAULT_CACHE_TTL_SECONDS


class CACHE_KEYS:
    DIVIDEND_DATA = "dividends:"
    STOCK_SEARCH = "search:"


@dataclass
class _Entry:
    value: Any
    expires_at: float


class TTLCache:
    """Key/value store whose entries disappear after ``ttl_seconds``.

    Expired entries are evicted lazily when they are read. ``clock`` must be
    monotonic and return seconds; tests inject a fake one.
    """

    def __init__(
        self,
        default_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._store: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expires_at:
                del self._store[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._store[key] = _Entry(value=value, expires_at=self._clock() + ttl)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear_prefix(self, prefix: str) -> None:
        with self._lock:
            for key in [k for k in self._store if k.startswith(prefix)]:
                del self._store[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
