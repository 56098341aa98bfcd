from __future__ import annotations

import time
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    """In-memory cache whose entries expire ``ttl_seconds`` after being set.

    ``ttl_seconds <= 0`` disables expiry. The clock defaults to
    ``time.monotonic`` and can be replaced for tests.
    """

    def __init__(
        self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._store: Dict[K, Tuple[float, V]] = {}

    def get(self, key: K) -> Optional[V]:
        item = self._store.get(key)
        if item is None:
            return None
        expiry, value = item
        if self._ttl > 0 and self._clock() >= expiry:
            self._store.pop(key, None)
            return None
        return value

    def set(self, key: K, value: V) -> None:
        self._store[key] = (self._clock() + self._ttl, value)

    def invalidate(self, key: K) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
