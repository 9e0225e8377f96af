import logging

from fxconvert.cache.rate_cache import RateCache
from fxconvert.config.settings import Settings, get_settings
from fxconvert.providers import ExchangeRateAPIProvider, FrankfurterProvider, JSONRateProvider, RateProvider
from fxconvert.services.conversion import ConversionEngine
from fxconvert.services.failover import ProviderFailover
from fxconvert.services.rate_source import CachedRemoteRateSource, RateSource, StaticRateSource

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Factory to create and wire up all services with dependencies"""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self.rate_source: RateSource | None = None
        self.conversion_engine: ConversionEngine | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def create_providers(self) -> list[RateProvider]:
        settings = self.settings
        timeouts = {"connect_timeout": settings.CONNECT_TIMEOUT, "read_timeout": settings.READ_TIMEOUT}

        if settings.PROVIDER_ENDPOINTS:
            return [JSONRateProvider(url_template=template, **timeouts) for template in settings.PROVIDER_ENDPOINTS]

        return [
            ExchangeRateAPIProvider(**timeouts),
            FrankfurterProvider(**timeouts),
        ]

    def create_rate_source(self) -> RateSource:
        if self.settings.RATE_SOURCE == "static":
            return StaticRateSource()

        providers = self.create_providers()
        return CachedRemoteRateSource(
            cache=RateCache(ttl_seconds=self.settings.CACHE_TTL_SECONDS),
            failover=ProviderFailover(providers),
        )

    def create_conversion_engine(self) -> ConversionEngine:
        """Build the engine once; later calls return the same instance"""
        if self.conversion_engine is not None:
            return self.conversion_engine

        self.rate_source = self.create_rate_source()
        self.conversion_engine = ConversionEngine(
            rate_source=self.rate_source,
            default_base=self.settings.DEFAULT_BASE_CURRENCY,
        )

        logger.info(
            "Conversion engine created with %s rate source (default base %s)",
            self.rate_source.kind,
            self.settings.DEFAULT_BASE_CURRENCY,
        )
        return self.conversion_engine

    def get_health_status(self) -> dict:
        if self.rate_source is None:
            return {"status": "not_initialized"}
        return {"status": "healthy", **self.rate_source.status()}

    async def cleanup(self):
        """Close HTTP clients"""
        if self.rate_source is not None:
            await self.rate_source.close()
        self.rate_source = None
        self.conversion_engine = None
        logger.info("Services cleaned up successfully")


# Global service factory instance
service_factory = ServiceFactory()
