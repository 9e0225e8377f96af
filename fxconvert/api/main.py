import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fxconvert.api.error_handlers import register_exception_handlers
from fxconvert.api.routes import convert, currencies, health, rates
from fxconvert.config.settings import get_settings
from fxconvert.monitoring.logger import get_production_logger, setup_logging
from fxconvert.services.service_factory import service_factory

logger = logging.getLogger(__name__)

settings = get_settings()
production_logger = get_production_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(
        log_directory=settings.LOG_DIRECTORY,
        console_level=settings.LOG_LEVEL,
        log_to_file=settings.LOG_TO_FILE
    )
    logger.info("Starting Currency Converter API...")

    try:
        with production_logger.time_operation("Service initialization"):
            engine = service_factory.create_conversion_engine()
    except Exception as e:
        logger.error("Failed to start services: %s", e)
        raise

    production_logger.log_service_lifecycle("Services started", rate_source=engine.rate_source.kind)

    yield

    logger.info("Shutting down Currency Converter API...")
    await service_factory.cleanup()
    production_logger.log_service_lifecycle("Services stopped")


app = FastAPI(
    title=settings.APP_NAME,
    description="Currency conversion with multi-provider failover and in-memory rate caching",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(convert.router)
app.include_router(rates.router)
app.include_router(currencies.router)
app.include_router(health.router)


@app.get(
    "/",
    summary="API Information",
    description="Get basic information about the Currency Converter API"
)
async def root():
    """Root endpoint with API information"""
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0",
        "description": "Currency conversion with live rates",
        "endpoints": {
            "conversion": "/api/v1/convert",
            "batch_conversion": "/api/v1/convert/batch",
            "rates": "/api/v1/rates/{from_currency}/{to_currency}",
            "currencies": "/api/v1/currencies",
            "health": "/api/v1/health",
            "documentation": "/docs"
        },
        "features": [
            "Multiple API provider fallback",
            f"In-memory rate caching ({settings.CACHE_TTL_SECONDS}s TTL)",
            "Offline static rate table",
        ],
        "timestamp": datetime.now(UTC).isoformat()
    }


def run():
    import uvicorn

    uvicorn.run(
        "fxconvert.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
