import urllib.parse
from typing import Any

import httpx

from .base import DEFAULT_CONNECT_TIMEOUT, DEFAULT_READ_TIMEOUT, RateProvider


class JSONRateProvider(RateProvider):
    """Any endpoint answering ``<template><BASE>`` with a JSON object holding a rate mapping"""

    def __init__(self,
                 url_template: str,
                 name: str | None = None,
                 rates_field: str = "rates",
                 connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
                 read_timeout: float = DEFAULT_READ_TIMEOUT,
                 client: httpx.AsyncClient | None = None):
        super().__init__(
            name=name or urllib.parse.urlparse(url_template).netloc or url_template,
            url_template=url_template,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            client=client,
        )
        self.rates_field = rates_field

    def _parse_rates(self, payload: dict[str, Any], base: str) -> dict[str, Any]:
        return self._extract_rates(payload, base, field=self.rates_field)
