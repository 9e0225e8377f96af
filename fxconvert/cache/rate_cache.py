import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from fxconvert.domain.models import RateTable, normalize_currency_code
from fxconvert.monitoring.logger import get_production_logger
from fxconvert.utils.time import utc_now

DEFAULT_TTL_SECONDS = 3600

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    table: RateTable
    stored_at: datetime
    ttl: timedelta

    @property
    def expires_at(self) -> datetime:
        return self.stored_at + self.ttl

    def age_seconds(self, now: datetime) -> float:
        return (now - self.stored_at).total_seconds()

    def is_expired(self, now: datetime) -> bool:
        # An entry is still fresh at exactly ttl seconds old
        return now - self.stored_at > self.ttl


class RateCache:
    """
    In-memory, time-expiring store of rate tables keyed by base currency.

    Expired entries read as misses but stay in place until the next ``put``
    for the same base overwrites them. One lock guards the mapping so the
    cache can be shared across threads and tasks.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS,
                 clock: Callable[[], datetime] = utc_now):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock
        self.production_logger = get_production_logger()

        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _make_key(self, base: str) -> str:
        return normalize_currency_code(base)

    def get(self, base: str) -> RateTable | None:
        key = self._make_key(base)
        now = self.clock()
        with self._lock:
            entry = self._entries.get(key)
            fresh = entry is not None and not entry.is_expired(now)
            if fresh:
                self._hits += 1
            else:
                self._misses += 1

        self.production_logger.log_cache_operation(
            operation="get",
            cache_key=key,
            hit=fresh,
            data_age_seconds=entry.age_seconds(now) if entry else None,
        )
        return entry.table if fresh else None

    def put(self, base: str, table: RateTable) -> CacheEntry:
        key = self._make_key(base)
        if table.base_currency != key:
            raise ValueError(f"Cannot cache a {table.base_currency} table under {key}")

        entry = CacheEntry(table=table, stored_at=self.clock(), ttl=self.ttl)
        with self._lock:
            self._entries[key] = entry

        self.production_logger.log_cache_operation(operation="put", cache_key=key, hit=False)
        return entry

    def invalidate(self, base: str) -> bool:
        key = self._make_key(base)
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            logger.info("Invalidated cached rates for %s", key)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict[str, Any]:
        now = self.clock()
        with self._lock:
            entries = dict(self._entries)
            hits, misses = self._hits, self._misses

        return {
            "entries": len(entries),
            "fresh_entries": sum(1 for e in entries.values() if not e.is_expired(now)),
            "bases": sorted(entries),
            "hits": hits,
            "misses": misses,
            "ttl_seconds": int(self.ttl.total_seconds()),
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
