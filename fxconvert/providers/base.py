import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx

from fxconvert.domain.exceptions import (
    InvalidCurrencyCodeError,
    ProviderMalformedResponseError,
    ProviderUnavailableError,
)
from fxconvert.domain.models import RateTable, normalize_currency_code
from fxconvert.monitoring.logger import get_production_logger
from fxconvert.utils.time import elapsed_ms, utc_now

DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 5.0
USER_AGENT = "Mozilla/5.0 (compatible; fxconvert/1.0)"


class RateProvider(ABC):
    """
    One upstream endpoint that returns a full rate table for a base currency.

    The request URL is ``url_template + BASE``. Any non-200 status, transport
    error or timeout is a ``ProviderUnavailableError``; a body without a usable
    rate mapping is a ``ProviderMalformedResponseError``.
    """

    def __init__(self,
                 name: str,
                 url_template: str,
                 connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
                 read_timeout: float = DEFAULT_READ_TIMEOUT,
                 client: httpx.AsyncClient | None = None,
                 clock: Callable[[], datetime] = utc_now):
        self.name = name
        self.url_template = url_template
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.clock = clock
        self.logger = logging.getLogger(f"fxconvert.provider.{name}")
        self.production_logger = get_production_logger()

        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(read_timeout, connect=connect_timeout),
            headers={"accept": "application/json", "User-Agent": USER_AGENT},
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )

    @abstractmethod
    def _parse_rates(self, payload: dict[str, Any], base: str) -> dict[str, Any]:
        """Pull the provider-specific rate mapping out of a decoded payload"""
        pass

    def _build_request_url(self, base: str) -> str:
        return f"{self.url_template}{base}"

    async def fetch(self, base_currency: str) -> RateTable:
        """Fetch every rate for ``base_currency`` from this endpoint"""
        base = normalize_currency_code(base_currency)
        url = self._build_request_url(base)
        payload = await self._make_request(url)

        try:
            rates = self._parse_rates(payload, base)
            table = RateTable(
                base_currency=base,
                rates=rates,
                fetched_at=self.clock(),
                source=self.name,
            )
        except ProviderMalformedResponseError as e:
            self._log_failure(url, None, str(e))
            raise
        except (InvalidCurrencyCodeError, TypeError, ValueError) as e:
            self._log_failure(url, None, str(e))
            raise ProviderMalformedResponseError(self.name, str(e)) from e

        self.logger.debug("Fetched %d rates for %s from %s", len(table.rates), base, self.name)
        return table

    async def _make_request(self, url: str) -> dict[str, Any]:
        """Common HTTP request handling with timing and error management"""
        start_time = time.perf_counter()
        try:
            response = await self.client.get(url)
        except httpx.TimeoutException as e:
            reason = f"Timeout after {self.read_timeout}s"
            self._log_failure(url, None, reason, start_time)
            raise ProviderUnavailableError(self.name, reason=reason) from e
        except httpx.RequestError as e:
            reason = f"{e.__class__.__name__}: {e}"
            self._log_failure(url, None, reason, start_time)
            raise ProviderUnavailableError(self.name, reason=reason) from e

        if response.status_code != 200:
            self._log_failure(url, response.status_code, f"HTTP {response.status_code}: {response.text[:200]}",
                              start_time)
            raise ProviderUnavailableError(self.name, status=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            self._log_failure(url, response.status_code, "Response body is not valid JSON", start_time)
            raise ProviderMalformedResponseError(self.name, "response body is not valid JSON") from e

        if not isinstance(payload, dict):
            self._log_failure(url, response.status_code, "Response body is not a JSON object", start_time)
            raise ProviderMalformedResponseError(self.name, "response body is not a JSON object")

        self.production_logger.log_api_call(
            provider_name=self.name,
            url=url,
            success=True,
            response_time_ms=elapsed_ms(start_time, time.perf_counter()),
            status_code=response.status_code,
        )
        return payload

    def _extract_rates(self, payload: dict[str, Any], base: str, field: str = "rates") -> dict[str, Any]:
        """Shared validation for ``{"base": ..., "<field>": {...}}`` shaped payloads"""
        declared_base = payload.get("base")
        if isinstance(declared_base, str) and declared_base.upper() != base:
            raise ProviderMalformedResponseError(
                self.name, f"response is for base {declared_base}, expected {base}"
            )

        rates = payload.get(field)
        if rates is None:
            raise ProviderMalformedResponseError(self.name, f"missing '{field}' field")
        if not isinstance(rates, dict):
            raise ProviderMalformedResponseError(self.name, f"'{field}' field is not an object")

        for code, value in rates.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ProviderMalformedResponseError(
                    self.name, f"rate for {code} is not a positive number: {value!r}"
                )
        return rates

    def _log_failure(self, url: str, status_code: int | None, error_message: str,
                     start_time: float | None = None) -> None:
        self.production_logger.log_api_call(
            provider_name=self.name,
            url=url,
            success=False,
            response_time_ms=elapsed_ms(start_time, time.perf_counter()) if start_time is not None else 0,
            status_code=status_code,
            error_message=error_message,
        )

    async def close(self):
        """Clean up HTTP client"""
        await self.client.aclose()

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name}, url_template={self.url_template})>"
