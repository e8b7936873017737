# core/cache.py
"""
Bounded memo cache keyed by a digest of rounded inputs.
"""
from __future__ import annotations

import hashlib
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from core.constants import CACHE_CONFIG
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CacheInfo:
    hits: int
    misses: int
    evictions: int
    size: int
    max_entries: int


def input_digest(values: Sequence[float], decimals: Sequence[int]) -> bytes:
    """
    Fingerprint a tuple of floats after rounding each to a fixed precision.

    ``-0.0`` and ``0.0`` produce the same digest.
    """
    h = hashlib.blake2b(digest_size=16)
    for value, places in zip(values, decimals):
        text = f"{round(float(value), places) + 0.0:.{places}f}"
        h.update(text.encode("ascii"))
        h.update(b"|")
    return h.digest()


class BoundedCache:
    """
    Thread-safe LRU mapping from digest to value.

    Lookups and inserts hold a single lock, so concurrent callers with the
    same key always observe the same stored value.
    """

    def __init__(self, max_entries: int = CACHE_CONFIG.MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._data: "OrderedDict[bytes, Any]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: bytes) -> Optional[Any]:
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
                self._hits += 1
                return self._data[key]
            self._misses += 1
            return None

    def put(self, key: bytes, value: Any) -> Any:
        """Store *value* unless *key* is already present; return the stored value."""
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
                return self._data[key]
            self._data[key] = value
            if len(self._data) > self.max_entries:
                self._data.popitem(last=False)
                self._evictions += 1
            return value

    def get_or_compute(self, key: bytes, compute: Callable[[], Any]) -> Tuple[Any, bool]:
        """Return ``(value, hit)``; compute runs outside the lock."""
        cached = self.get(key)
        if cached is not None:
            return cached, True
        value = compute()
        return self.put(key, value), False

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._hits = self._misses = self._evictions = 0
        logger.debug("Cache cleared.")

    def info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(self._hits, self._misses, self._evictions,
                             len(self._data), self.max_entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: bytes) -> bool:
        with self._lock:
            return key in self._data
