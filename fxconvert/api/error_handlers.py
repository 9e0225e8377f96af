import logging
from datetime import UTC, datetime

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fxconvert.domain.exceptions import (
    AllProvidersExhaustedError,
    CurrencyException,
    InvalidAmountError,
    InvalidCurrencyCodeError,
    UnknownCurrencyError,
)

logger = logging.getLogger(__name__)

# Most specific first; CurrencyException is the catch-all
_STATUS_BY_ERROR: list[tuple[type[CurrencyException], int, str]] = [
    (InvalidCurrencyCodeError, 400, "invalid_currency_code"),
    (InvalidAmountError, 400, "invalid_amount"),
    (UnknownCurrencyError, 404, "unknown_currency"),
    (AllProvidersExhaustedError, 503, "providers_unavailable"),
]


def _error_body(error: str, message: str, request: Request, **extra) -> dict:
    return {
        "error": error,
        "message": message,
        "timestamp": datetime.now(UTC).isoformat(),
        "path": str(request.url.path),
        **extra,
    }


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CurrencyException)
    async def currency_exception_handler(request: Request, exc: CurrencyException):
        for error_type, status_code, error in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                break
        else:
            status_code, error = 500, "conversion_error"

        if status_code >= 500:
            logger.error("Conversion failed on %s: %s", request.url.path, exc)
            message = "Exchange rate service unavailable" if status_code == 503 else str(exc)
        else:
            logger.warning("Rejected request on %s: %s", request.url.path, exc)
            message = str(exc)

        return JSONResponse(status_code=status_code, content=_error_body(error, message, request))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with consistent format"""
        logger.error("HTTPException caught: Status %s, Detail: %s", exc.status_code, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("http_error", str(exc.detail), request)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors"""
        logger.warning("Validation error on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=422,
            content=_error_body(
                "validation_error",
                "Invalid request data",
                request,
                details=[{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()],
            )
        )
