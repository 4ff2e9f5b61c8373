from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    """Thread-safe in-memory TTL cache.

    - Stores values with an absolute expiry computed from ``ttl_seconds``.
    - Uses ``time.monotonic()`` by default; pass ``clock`` to control time in tests.
    - Expired entries are dropped lazily on access and by :meth:`purge`.

    The alignment checker uses it as its notification ledger: match ids are
    stored after a successful notification and skipped until they expire.
    """

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._store: Dict[K, Tuple[float, V]] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            item = self._store.get(key)
            if item is None:
                return None
            expiry, value = item
            if self._clock() >= expiry:
                self._store.pop(key, None)
                return None
            return value

    def set(self, key: K, value: V) -> None:
        with self._lock:
            self._store[key] = (self._clock() + self._ttl, value)

    def discard(self, key: K) -> None:
        with self._lock:
            self._store.pop(key, None)

    def purge(self) -> int:
        """Drop expired entries and return how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, (expiry, _) in self._store.items() if now >= expiry]
            for key in expired:
                del self._store[key]
            return len(expired)

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        self.purge()
        return len(self._store)
