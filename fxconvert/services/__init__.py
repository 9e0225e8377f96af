from .conversion import POPULAR_CURRENCIES, ConversionEngine
from .failover import ProviderFailover
from .rate_source import STATIC_USD_RATES, CachedRemoteRateSource, RateSource, StaticRateSource

__all__ = [
    "CachedRemoteRateSource",
    "ConversionEngine",
    "POPULAR_CURRENCIES",
    "ProviderFailover",
    "RateSource",
    "STATIC_USD_RATES",
    "StaticRateSource",
]
