import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from fxconvert.domain.exceptions import InvalidAmountError, InvalidCurrencyCodeError, UnknownCurrencyError


def normalize_currency_code(code: str) -> str:
    """Uppercase a currency code and check it is exactly three ASCII letters"""
    if not isinstance(code, str):
        raise InvalidCurrencyCodeError(code)
    normalized = code.strip().upper()
    if len(normalized) != 3 or not (normalized.isascii() and normalized.isalpha()):
        raise InvalidCurrencyCodeError(code)
    return normalized


def is_well_formed_code(code: str) -> bool:
    try:
        normalize_currency_code(code)
    except InvalidCurrencyCodeError:
        return False
    return True


@dataclass(frozen=True)
class RateTable:
    """
    Every rate known for one base currency.

    1 unit of ``base_currency`` equals ``rates[code]`` units of ``code``.
    The base always maps to exactly 1.0, whatever the upstream payload said.
    ``rates`` is exposed read-only.
    """
    base_currency: str
    rates: Mapping[str, float]
    fetched_at: datetime
    source: str

    def __post_init__(self):
        base = normalize_currency_code(self.base_currency)
        rates: dict[str, float] = {}
        for code, value in self.rates.items():
            rate = float(value)
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"Rate for {code} must be a positive number, got {value!r}")
            rates[normalize_currency_code(code)] = rate
        rates[base] = 1.0

        object.__setattr__(self, "base_currency", base)
        object.__setattr__(self, "rates", MappingProxyType(rates))

    def __contains__(self, code: object) -> bool:
        return is_well_formed_code(code) and normalize_currency_code(code) in self.rates

    def rate_for(self, code: str) -> float:
        target = normalize_currency_code(code)
        try:
            return self.rates[target]
        except KeyError:
            raise UnknownCurrencyError(target, self.base_currency) from None

    def currencies(self) -> list[str]:
        return sorted(self.rates)


@dataclass(frozen=True)
class ConversionRequest:
    amount: float
    from_currency: str
    to_currency: str

    def __post_init__(self):
        if isinstance(self.amount, bool):
            raise InvalidAmountError(self.amount)
        try:
            amount = float(self.amount)
        except (TypeError, ValueError):
            raise InvalidAmountError(self.amount) from None
        if not math.isfinite(amount) or amount < 0:
            raise InvalidAmountError(self.amount)

        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "from_currency", normalize_currency_code(self.from_currency))
        object.__setattr__(self, "to_currency", normalize_currency_code(self.to_currency))

    @property
    def is_same_currency(self) -> bool:
        return self.from_currency == self.to_currency


@dataclass(frozen=True)
class ConversionResult:
    from_currency: str
    to_currency: str
    amount: float
    converted_amount: float
    rate: float
    timestamp: datetime | None = None
    source: str | None = None

    @property
    def rate_display(self) -> str:
        return f"{self.rate:.6f}"


@dataclass(frozen=True)
class RateInfo:
    """Rates between two currencies in both directions"""
    from_currency: str
    to_currency: str
    rate: float
    reverse_rate: float


@dataclass
class BatchConversionItem:
    to_currency: str
    converted_amount: float | None = None
    rate: float | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def is_successful(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class PopularCurrency:
    code: str
    name: str


@dataclass
class BatchConversion:
    from_currency: str
    amount: float
    items: list[BatchConversionItem] = field(default_factory=list)
