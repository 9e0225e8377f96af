from .base import RateProvider
from .exchangerate_api import ExchangeRateAPIProvider
from .frankfurter import FrankfurterProvider
from .generic import JSONRateProvider

__all__ = [
    "RateProvider",
    "ExchangeRateAPIProvider",
    "FrankfurterProvider",
    "JSONRateProvider",
]
