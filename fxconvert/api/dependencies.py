import logging

from fastapi import HTTPException, status

from fxconvert.services.conversion import ConversionEngine
from fxconvert.services.service_factory import ServiceFactory, service_factory

logger = logging.getLogger(__name__)


async def get_conversion_engine() -> ConversionEngine:
    """
    Dependency to get the conversion engine.
    This ensures we reuse the same service factory instance across all requests.
    """
    try:
        return service_factory.create_conversion_engine()
    except Exception as e:
        logger.error("Failed to get conversion engine: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily unavailable"
        ) from e


async def get_service_factory() -> ServiceFactory:
    """
    Dependency to get the service factory itself.
    Useful for health checks and accessing multiple services.
    """
    return service_factory
