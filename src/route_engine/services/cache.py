from __future__ import annotations

import hashlib
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Generic, TypeVar

from route_engine.services.types import Location, TravelMode

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class CacheEntry(Generic[T]):
    result: T
    timestamp: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.timestamp > self.ttl


class RouteCache(Generic[T]):
    """Thread-safe in-process cache with per-entry TTL and bounded size.

    Reads refresh recency, so eviction drops the least recently used entry.
    Expired entries are dropped lazily on read or in bulk by ``clear_expired``.
    """

    def __init__(
        self,
        max_size: int = 500,
        default_ttl: float = 6 * 60 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_size < 1:
            raise ValueError("Cache max_size must be at least 1")
        self.max_size = max_size
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry[T]] = OrderedDict()
        self._lock = Lock()

    def get(self, key: str) -> T | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return entry.result

    def put(self, key: str, value: T, ttl: float | None = None) -> None:
        entry = CacheEntry(
            result=value,
            timestamp=self._clock(),
            ttl=self.default_ttl if ttl is None else ttl,
        )
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_size:
                self._entries.popitem(last=False)
            self._entries[key] = entry

    def clear_expired(self) -> int:
        with self._lock:
            now = self._clock()
            expired_keys = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired_keys:
                del self._entries[key]

        if expired_keys:
            logger.info("Cleared %d expired routing cache entries", len(expired_keys))
        return len(expired_keys)

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {"size": len(self._entries), "max_size": self.max_size}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def route_cache_key(
    source: Location,
    destination: Location,
    mode: TravelMode,
    custom_speed: float | None,
) -> str:
    # 4 decimal places is roughly 11 m, so near-duplicate lookups share an entry
    encoded = "|".join(
        [
            f"{source.coordinates.latitude:.4f}:{source.coordinates.longitude:.4f}",
            f"{destination.coordinates.latitude:.4f}:{destination.coordinates.longitude:.4f}",
            mode.value,
            f"{custom_speed}" if custom_speed else "default",
        ]
    ).encode()
    digest = hashlib.sha256(encoded).hexdigest()
    return f"route:{digest}"
