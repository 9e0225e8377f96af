from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from fxconvert.api.dependencies import get_service_factory
from fxconvert.api.models.responses import HealthResponse
from fxconvert.monitoring.logger import get_production_logger
from fxconvert.services.service_factory import ServiceFactory

production_logger = get_production_logger()

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="System health check",
    description="Rate source kind, provider rotation state and cache statistics"
)
async def health_check(
    service_factory: Annotated[ServiceFactory, Depends(get_service_factory)]
):
    """
    Reports the state of the rate source without calling any upstream provider.
    """
    rate_source = service_factory.get_health_status()
    overall_status = rate_source.pop("status")

    production_logger.log_health_check(overall_status, {"rate_source": rate_source.get("kind")})

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(UTC),
        services={"rate_source": rate_source}
    )


@router.get(
    "/health/simple",
    summary="Simple health check",
    description="Quick health check that just returns 200 OK if system is running"
)
async def simple_health_check():
    """
    Minimal health check for load balancers and monitoring systems.
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC),
        "message": "API is responding"
    }
