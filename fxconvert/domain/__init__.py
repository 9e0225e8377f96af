from .exceptions import (
    AllProvidersExhaustedError,
    CurrencyException,
    InvalidAmountError,
    InvalidCurrencyCodeError,
    ProviderError,
    ProviderMalformedResponseError,
    ProviderUnavailableError,
    UnknownCurrencyError,
)
from .models import (
    BatchConversion,
    BatchConversionItem,
    ConversionRequest,
    ConversionResult,
    PopularCurrency,
    RateInfo,
    RateTable,
    is_well_formed_code,
    normalize_currency_code,
)

__all__ = [
    "AllProvidersExhaustedError",
    "BatchConversion",
    "BatchConversionItem",
    "ConversionRequest",
    "ConversionResult",
    "CurrencyException",
    "InvalidAmountError",
    "InvalidCurrencyCodeError",
    "PopularCurrency",
    "ProviderError",
    "ProviderMalformedResponseError",
    "ProviderUnavailableError",
    "RateInfo",
    "RateTable",
    "UnknownCurrencyError",
    "is_well_formed_code",
    "normalize_currency_code",
]
