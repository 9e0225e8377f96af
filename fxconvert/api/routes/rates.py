from typing import Annotated

from fastapi import APIRouter, Depends, Path

from fxconvert.api.dependencies import get_conversion_engine
from fxconvert.api.models.responses import ErrorResponse, RateInfoResponse, RateTableResponse
from fxconvert.services.conversion import ConversionEngine

router = APIRouter(prefix="/api/v1", tags=["rates"])

CurrencyPath = Annotated[str, Path(min_length=3, max_length=3)]


@router.get(
    "/rates/{from_currency}/{to_currency}",
    response_model=RateInfoResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid currency code"},
        404: {"model": ErrorResponse, "description": "Currency not offered by the provider"},
        503: {"model": ErrorResponse, "description": "Every rate provider failed"},
    },
    summary="Get exchange rate info",
    description="Get the current exchange rate between two currencies in both directions"
)
async def get_rate_info(
    from_currency: CurrencyPath,
    to_currency: CurrencyPath,
    engine: Annotated[ConversionEngine, Depends(get_conversion_engine)]
):
    """
    Returns 1 FROM = x TO and 1 TO = y FROM without converting an amount.
    """
    info = await engine.rate_info(from_currency, to_currency)
    return RateInfoResponse(
        from_currency=info.from_currency,
        to_currency=info.to_currency,
        exchange_rate=info.rate,
        reverse_rate=info.reverse_rate,
        rate_display=f"{info.rate:.6f}",
        reverse_rate_display=f"{info.reverse_rate:.6f}"
    )


@router.get(
    "/rates/{base_currency}",
    response_model=RateTableResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid currency code"},
        503: {"model": ErrorResponse, "description": "Every rate provider failed"},
    },
    summary="Get the full rate table for a base currency"
)
async def get_rate_table(
    base_currency: CurrencyPath,
    engine: Annotated[ConversionEngine, Depends(get_conversion_engine)]
):
    table = await engine.get_rate_table(base_currency)
    return RateTableResponse(
        base_currency=table.base_currency,
        rates={code: table.rates[code] for code in table.currencies()},
        source=table.source,
        timestamp=table.fetched_at
    )
