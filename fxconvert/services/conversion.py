import logging
import math
import time
from collections.abc import Iterable

from fxconvert.domain.exceptions import (
    AllProvidersExhaustedError,
    InvalidAmountError,
    InvalidCurrencyCodeError,
    UnknownCurrencyError,
)
from fxconvert.domain.models import (
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
from fxconvert.monitoring.logger import get_production_logger
from fxconvert.services.rate_source import RateSource

logger = logging.getLogger(__name__)

POPULAR_CURRENCIES: tuple[PopularCurrency, ...] = (
    PopularCurrency("USD", "US Dollar"),
    PopularCurrency("EUR", "Euro"),
    PopularCurrency("GBP", "British Pound"),
    PopularCurrency("JPY", "Japanese Yen"),
    PopularCurrency("CHF", "Swiss Franc"),
    PopularCurrency("CAD", "Canadian Dollar"),
    PopularCurrency("AUD", "Australian Dollar"),
    PopularCurrency("CNY", "Chinese Yuan"),
    PopularCurrency("INR", "Indian Rupee"),
    PopularCurrency("KRW", "South Korean Won"),
    PopularCurrency("BRL", "Brazilian Real"),
    PopularCurrency("MXN", "Mexican Peso"),
    PopularCurrency("ZAR", "South African Rand"),
    PopularCurrency("SGD", "Singapore Dollar"),
    PopularCurrency("HKD", "Hong Kong Dollar"),
)


class ConversionEngine:
    """
    Converts amounts between currencies using tables from a pluggable rate source.

    Tables are always requested for the source currency, so the converted
    amount is simply ``amount * table.rates[target]``. Converting a currency
    into itself never touches the rate source.
    """

    def __init__(self, rate_source: RateSource, default_base: str = "USD"):
        self.rate_source = rate_source
        self.default_base = normalize_currency_code(default_base)
        self.production_logger = get_production_logger()

    async def get_rate_table(self, base_currency: str) -> RateTable:
        return await self.rate_source.get_table(base_currency)

    @staticmethod
    def _apply_rate(amount: float, rate: float, to_currency: str) -> float:
        converted = amount * rate
        if not math.isfinite(converted):
            logger.warning("Converting %r at %r into %s overflows", amount, rate, to_currency)
            raise InvalidAmountError(amount, f"too large to convert into {to_currency}")
        return converted

    async def quote(self, amount: float, from_currency: str, to_currency: str) -> ConversionResult:
        request = ConversionRequest(amount=amount, from_currency=from_currency, to_currency=to_currency)

        if request.is_same_currency:
            return ConversionResult(
                from_currency=request.from_currency,
                to_currency=request.to_currency,
                amount=request.amount,
                converted_amount=request.amount,
                rate=1.0,
            )

        start_time = time.perf_counter()
        table = await self.get_rate_table(request.from_currency)
        rate = table.rate_for(request.to_currency)
        result = ConversionResult(
            from_currency=request.from_currency,
            to_currency=request.to_currency,
            amount=request.amount,
            converted_amount=self._apply_rate(request.amount, rate, request.to_currency),
            rate=rate,
            timestamp=table.fetched_at,
            source=table.source,
        )

        self.production_logger.log_conversion(
            from_currency=result.from_currency,
            to_currency=result.to_currency,
            amount=result.amount,
            converted_amount=result.converted_amount,
            rate=rate,
            source=table.source,
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return result

    async def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        result = await self.quote(amount, from_currency, to_currency)
        return result.converted_amount

    async def exchange_rate(self, from_currency: str, to_currency: str) -> float:
        """How many units of ``to_currency`` one unit of ``from_currency`` buys"""
        result = await self.quote(1.0, from_currency, to_currency)
        return result.rate

    async def rate_info(self, from_currency: str, to_currency: str) -> RateInfo:
        rate = await self.exchange_rate(from_currency, to_currency)
        reverse_rate = await self.exchange_rate(to_currency, from_currency)
        return RateInfo(
            from_currency=normalize_currency_code(from_currency),
            to_currency=normalize_currency_code(to_currency),
            rate=rate,
            reverse_rate=reverse_rate,
        )

    async def batch_convert(self, amount: float, from_currency: str,
                            to_currencies: Iterable[str]) -> BatchConversion:
        """
        Convert one amount into several currencies.

        Problems with an individual target are recorded on its item and the
        rest of the batch carries on. Problems with the source side (bad code,
        bad amount, every provider down) abort the whole batch.
        """
        request = ConversionRequest(amount=amount, from_currency=from_currency, to_currency=from_currency)
        batch = BatchConversion(from_currency=request.from_currency, amount=request.amount)
        table: RateTable | None = None

        for raw_target in to_currencies:
            item = BatchConversionItem(to_currency=str(raw_target).strip().upper())
            try:
                target = normalize_currency_code(raw_target)
                if target == request.from_currency:
                    rate = 1.0
                else:
                    if table is None:
                        table = await self.get_rate_table(request.from_currency)
                    rate = table.rate_for(target)
                converted = self._apply_rate(request.amount, rate, target)
            except (InvalidCurrencyCodeError, UnknownCurrencyError, InvalidAmountError) as e:
                item.error = str(e)
                item.error_type = type(e).__name__
            else:
                item.rate = rate
                item.converted_amount = converted
            batch.items.append(item)

        return batch

    async def list_currencies(self, base_currency: str | None = None) -> list[str]:
        table = await self.get_rate_table(base_currency or self.default_base)
        return table.currencies()

    async def is_valid_code(self, code: str) -> bool:
        """A code is valid when the default base's table knows it (or it is the default base)"""
        if not is_well_formed_code(code):
            return False

        normalized = normalize_currency_code(code)
        if normalized == self.default_base:
            return True

        try:
            table = await self.get_rate_table(self.default_base)
        except AllProvidersExhaustedError as e:
            logger.warning("Could not validate %s, reference rates unavailable: %s", normalized, e)
            return False
        return normalized in table

    def popular_currencies(self) -> list[PopularCurrency]:
        return list(POPULAR_CURRENCIES)
