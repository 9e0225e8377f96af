import logging
import threading
from collections.abc import Sequence
from typing import Any

from fxconvert.domain.exceptions import AllProvidersExhaustedError, ProviderError
from fxconvert.domain.models import RateTable, normalize_currency_code
from fxconvert.monitoring.logger import get_production_logger
from fxconvert.providers.base import RateProvider

logger = logging.getLogger(__name__)


class ProviderFailover:
    """
    Rotates through providers until one returns a rate table.

    The rotation cursor is shared by every call on this instance. It moves
    past a provider when that provider fails and stays put on success, so the
    next call starts from the last provider that worked rather than index 0.
    """

    def __init__(self, providers: Sequence[RateProvider]):
        if not providers:
            raise ValueError("ProviderFailover needs at least one provider")
        self.providers: list[RateProvider] = list(providers)
        self.production_logger = get_production_logger()
        self._cursor = 0
        self._lock = threading.Lock()

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    @property
    def current_provider(self) -> RateProvider:
        return self.providers[self.cursor]

    def _advance_past(self, index: int) -> None:
        with self._lock:
            # Another caller may already have moved on from this index
            if self._cursor == index:
                self._cursor = (index + 1) % len(self.providers)

    async def fetch_with_fallback(self, base_currency: str) -> RateTable:
        base = normalize_currency_code(base_currency)
        total = len(self.providers)
        errors: list[tuple[str, ProviderError]] = []
        index = self.cursor

        for attempt in range(1, total + 1):
            provider = self.providers[index]
            try:
                logger.debug("Attempting %s for %s (attempt %d/%d)", provider.name, base, attempt, total)
                table = await provider.fetch(base)
            except ProviderError as e:
                errors.append((provider.name, e))
                self._advance_past(index)
                index = (index + 1) % total

                if attempt < total:
                    self.production_logger.log_provider_rotation(
                        base=base,
                        failed_provider=provider.name,
                        next_provider=self.providers[index].name,
                        attempt=attempt,
                        total=total,
                        error_message=str(e),
                    )
                continue

            logger.info("Fetched fresh rates for %s from %s (provider %d)", base, provider.name, index + 1)
            return table

        last_provider, last_error = errors[-1]
        logger.error("All %d providers failed for %s; last was %s: %s", total, base, last_provider, last_error)
        raise AllProvidersExhaustedError(last_error, errors) from last_error

    def status(self) -> dict[str, Any]:
        cursor = self.cursor
        return {
            "providers": [
                {"index": i, "name": p.name, "url_template": p.url_template, "current": i == cursor}
                for i, p in enumerate(self.providers)
            ],
            "cursor": cursor,
            "current_provider": self.providers[cursor].name,
        }

    async def close(self):
        for provider in self.providers:
            await provider.close()
