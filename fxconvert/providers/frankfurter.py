from typing import Any

import httpx

from .base import DEFAULT_CONNECT_TIMEOUT, DEFAULT_READ_TIMEOUT, RateProvider


class FrankfurterProvider(RateProvider):
    """
    Secondary provider implementation (ECB reference rates via frankfurter.app).

    Response format: {"amount": 1.0, "base": "EUR", "date": "2026-01-15", "rates": {"USD": 1.163}}
    Frankfurter leaves the base out of ``rates``; RateTable puts it back at 1.0.
    """

    URL_TEMPLATE = "https://api.frankfurter.app/latest?from="

    def __init__(self,
                 url_template: str = URL_TEMPLATE,
                 connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
                 read_timeout: float = DEFAULT_READ_TIMEOUT,
                 client: httpx.AsyncClient | None = None):
        super().__init__(
            name="Frankfurter",
            url_template=url_template,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            client=client,
        )

    def _parse_rates(self, payload: dict[str, Any], base: str) -> dict[str, Any]:
        return self._extract_rates(payload, base)
