from typing import Any

import httpx

from .base import DEFAULT_CONNECT_TIMEOUT, DEFAULT_READ_TIMEOUT, RateProvider


class ExchangeRateAPIProvider(RateProvider):
    """Primary provider implementation (exchangerate-api.com v4, no key required)"""

    URL_TEMPLATE = "https://api.exchangerate-api.com/v4/latest/"

    def __init__(self,
                 url_template: str = URL_TEMPLATE,
                 connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
                 read_timeout: float = DEFAULT_READ_TIMEOUT,
                 client: httpx.AsyncClient | None = None):
        super().__init__(
            name="ExchangeRateAPI",
            url_template=url_template,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            client=client,
        )

    def _parse_rates(self, payload: dict[str, Any], base: str) -> dict[str, Any]:
        """Parse {"base": "USD", "date": ..., "time_last_updated": ..., "rates": {...}}"""
        return self._extract_rates(payload, base)
