import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from fxconvert.api.dependencies import get_conversion_engine
from fxconvert.api.models.requests import BatchConvertRequest, ConvertRequest
from fxconvert.api.models.responses import (
    BatchConversionItemResponse,
    BatchConvertResponse,
    ConvertResponse,
    ErrorResponse,
)
from fxconvert.domain.exceptions import CurrencyException
from fxconvert.monitoring.logger import get_production_logger
from fxconvert.services.conversion import ConversionEngine

production_logger = get_production_logger()

router = APIRouter(prefix="/api/v1", tags=["conversion"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid currency code or amount"},
    404: {"model": ErrorResponse, "description": "Currency not offered by the provider"},
    503: {"model": ErrorResponse, "description": "Every rate provider failed"},
}


@router.post(
    "/convert",
    response_model=ConvertResponse,
    responses=ERROR_RESPONSES,
    summary="Convert currency amount",
    description="Convert an amount from one currency to another using live exchange rates"
)
async def convert_currency(
    request: ConvertRequest,
    engine: Annotated[ConversionEngine, Depends(get_conversion_engine)]
):
    """
    Convert currency amount using current exchange rates.
    """
    start_time = time.time()
    try:
        result = await engine.quote(request.amount, request.from_currency, request.to_currency)
    except CurrencyException as e:
        production_logger.log_user_request(
            endpoint="/convert",
            request_data=request.model_dump(),
            success=False,
            response_time_ms=(time.time() - start_time) * 1000,
            error_message=str(e)
        )
        raise

    production_logger.log_user_request(
        endpoint="/convert",
        request_data=request.model_dump(),
        success=True,
        response_time_ms=(time.time() - start_time) * 1000
    )

    return ConvertResponse(
        from_currency=result.from_currency,
        to_currency=result.to_currency,
        amount=result.amount,
        converted_amount=round(result.converted_amount, 2),
        exchange_rate=result.rate,
        rate_display=result.rate_display,
        source=result.source,
        timestamp=result.timestamp
    )


@router.get(
    "/convert/{from_currency}/{to_currency}/{amount}",
    response_model=ConvertResponse,
    responses=ERROR_RESPONSES,
    summary="Convert currency amount (GET)",
    description="Alternative GET endpoint for currency conversion (useful for simple requests)"
)
async def convert_currency_get(
    from_currency: Annotated[str, Path(min_length=3, max_length=3)],
    to_currency: Annotated[str, Path(min_length=3, max_length=3)],
    amount: Annotated[float, Path(ge=0)],
    engine: Annotated[ConversionEngine, Depends(get_conversion_engine)]
):
    """
    GET version of currency conversion for simple requests
    Example: GET /api/v1/convert/USD/EUR/100
    """
    try:
        request = ConvertRequest(
            from_currency=from_currency,
            to_currency=to_currency,
            amount=amount
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid currency codes or amount"
        ) from e
    return await convert_currency(request, engine)


@router.post(
    "/convert/batch",
    response_model=BatchConvertResponse,
    responses=ERROR_RESPONSES,
    summary="Convert one amount into several currencies",
    description="Targets that cannot be converted are reported individually; the rest of the batch still succeeds"
)
async def batch_convert(
    request: BatchConvertRequest,
    engine: Annotated[ConversionEngine, Depends(get_conversion_engine)]
):
    start_time = time.time()
    batch = await engine.batch_convert(request.amount, request.from_currency, request.to_currencies)

    production_logger.log_user_request(
        endpoint="/convert/batch",
        request_data=request.model_dump(),
        success=True,
        response_time_ms=(time.time() - start_time) * 1000
    )

    return BatchConvertResponse(
        from_currency=batch.from_currency,
        amount=batch.amount,
        results=[
            BatchConversionItemResponse(
                to_currency=item.to_currency,
                converted_amount=round(item.converted_amount, 2) if item.is_successful else None,
                exchange_rate=item.rate,
                error=item.error,
                error_type=item.error_type
            )
            for item in batch.items
        ]
    )
