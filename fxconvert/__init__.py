"""Currency conversion client with multi-provider failover and an in-memory rate cache."""

from fxconvert.cache import RateCache
from fxconvert.domain import (
    AllProvidersExhaustedError,
    CurrencyException,
    InvalidAmountError,
    InvalidCurrencyCodeError,
    ProviderError,
    ProviderMalformedResponseError,
    ProviderUnavailableError,
    RateTable,
    UnknownCurrencyError,
)
from fxconvert.services import CachedRemoteRateSource, ConversionEngine, ProviderFailover, StaticRateSource

__version__ = "1.0.0"

__all__ = [
    "AllProvidersExhaustedError",
    "CachedRemoteRateSource",
    "ConversionEngine",
    "CurrencyException",
    "InvalidAmountError",
    "InvalidCurrencyCodeError",
    "ProviderError",
    "ProviderFailover",
    "ProviderMalformedResponseError",
    "ProviderUnavailableError",
    "RateCache",
    "RateTable",
    "StaticRateSource",
    "UnknownCurrencyError",
]
