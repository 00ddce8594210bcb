"""Response cache used by the explorer service."""
from __future__ import annotations

import dataclasses
import datetime as dt
from collections import OrderedDict
from typing import Any, Callable, Mapping, Optional


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


def make_cache_key(prefix: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Build a stable key from ``prefix`` and the sorted, non-empty ``params``."""

    parts = [f"{k}={params[k]}" for k in sorted(params or {}) if params[k] is not None]
    return f"{prefix}?{'&'.join(parts)}" if parts else prefix


@dataclasses.dataclass
class CacheEntry:
    value: Any
    stored_at: dt.datetime

    def age(self, now: Optional[dt.datetime] = None) -> dt.timedelta:
        now = now or _utcnow()
        return now - self.stored_at

    def is_stale(self, ttl: Optional[dt.timedelta], now: Optional[dt.datetime] = None) -> bool:
        if ttl is None:
            return False
        now = now or _utcnow()
        return self.age(now) > ttl


class ResponseCache:
    """Bounded in-memory cache with TTL expiry.

    When ``max_size`` entries are held, the oldest insertion is evicted to make
    room for a new key.  Expired entries are dropped on lookup.
    """

    def __init__(
        self,
        ttl: Optional[dt.timedelta] = dt.timedelta(hours=1),
        max_size: int = 100,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ) -> None:
        self.ttl = ttl
        self.max_size = max_size
        self._clock = clock or _utcnow
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if not entry:
            return None
        if entry.is_stale(self.ttl, now=self._clock()):
            del self._entries[key]
            return None
        return entry

    def set(self, key: str, value: Any) -> CacheEntry:
        if self.max_size <= 0:
            return CacheEntry(value=value, stored_at=self._clock())
        if key in self._entries:
            del self._entries[key]
        while len(self._entries) >= self.max_size:
            self._entries.popitem(last=False)
        entry = CacheEntry(value=value, stored_at=self._clock())
        self._entries[key] = entry
        return entry

    def purge_expired(self) -> int:
        """Drop every stale entry and return how many were removed."""

        now = self._clock()
        stale = [key for key, entry in self._entries.items() if entry.is_stale(self.ttl, now)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["CacheEntry", "ResponseCache", "make_cache_key"]
