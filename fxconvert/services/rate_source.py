import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from fxconvert.cache.rate_cache import RateCache
from fxconvert.domain.exceptions import UnknownCurrencyError
from fxconvert.domain.models import RateTable, normalize_currency_code
from fxconvert.services.failover import ProviderFailover
from fxconvert.utils.time import utc_now

logger = logging.getLogger(__name__)

# 1 USD = X currency
STATIC_USD_RATES: dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 149.50,
    "CNY": 7.24,
    "INR": 83.12,
    "CAD": 1.36,
    "AUD": 1.53,
    "CHF": 0.88,
    "MXN": 17.15,
}


class RateSource(ABC):
    """Anything that can hand the conversion engine a rate table for a base currency"""

    kind: str = "base"

    @abstractmethod
    async def get_table(self, base_currency: str) -> RateTable:
        pass

    def status(self) -> dict[str, Any]:
        return {"kind": self.kind}

    async def close(self):
        pass


class CachedRemoteRateSource(RateSource):
    """Serve from the cache while fresh; otherwise fetch through the failover chain and cache the result"""

    kind = "remote"

    def __init__(self, cache: RateCache, failover: ProviderFailover):
        self.cache = cache
        self.failover = failover

    async def get_table(self, base_currency: str) -> RateTable:
        base = normalize_currency_code(base_currency)

        cached = self.cache.get(base)
        if cached is not None:
            logger.info("Using cached rates for %s (fetched %s)", base, cached.fetched_at.isoformat())
            return cached

        table = await self.failover.fetch_with_fallback(base)
        self.cache.put(base, table)
        return table

    def status(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "cache": self.cache.stats(),
            "failover": self.failover.status(),
        }

    async def close(self):
        await self.failover.close()


class StaticRateSource(RateSource):
    """
    Offline rates from a fixed table quoted against a single reference currency.

    Tables for other bases are derived by cross rate, so the only possible
    failure is a currency missing from the fixed table.
    """

    kind = "static"

    def __init__(self, rates: Mapping[str, float] | None = None, reference_currency: str = "USD",
                 clock: Callable[[], datetime] = utc_now):
        self.reference = RateTable(
            base_currency=reference_currency,
            rates=dict(rates if rates is not None else STATIC_USD_RATES),
            fetched_at=clock(),
            source="static",
        )

    async def get_table(self, base_currency: str) -> RateTable:
        base = normalize_currency_code(base_currency)
        if base == self.reference.base_currency:
            return self.reference
        if base not in self.reference.rates:
            raise UnknownCurrencyError(base)

        base_rate = self.reference.rates[base]
        return RateTable(
            base_currency=base,
            rates={code: rate / base_rate for code, rate in self.reference.rates.items()},
            fetched_at=self.reference.fetched_at,
            source="static",
        )

    def status(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "reference_currency": self.reference.base_currency,
            "currencies": self.reference.currencies(),
        }
