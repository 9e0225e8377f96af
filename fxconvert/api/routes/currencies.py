from typing import Annotated

from fastapi import APIRouter, Depends, Query

from fxconvert.api.dependencies import get_conversion_engine
from fxconvert.api.models.responses import (
    CurrenciesResponse,
    CurrencyValidationResponse,
    ErrorResponse,
    PopularCurrencyResponse,
)
from fxconvert.services.conversion import ConversionEngine

router = APIRouter(prefix="/api/v1", tags=["currencies"])


@router.get(
    "/currencies",
    response_model=CurrenciesResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid base currency"},
        503: {"model": ErrorResponse, "description": "Every rate provider failed"},
    },
    summary="List all available currencies",
    description="Sorted currency codes quoted against the given base (defaults to the configured base)"
)
async def list_currencies(
    engine: Annotated[ConversionEngine, Depends(get_conversion_engine)],
    base: Annotated[str | None, Query(min_length=3, max_length=3)] = None
):
    base_currency = (base or engine.default_base).upper()
    currencies = await engine.list_currencies(base_currency)
    return CurrenciesResponse(
        base_currency=base_currency,
        count=len(currencies),
        currencies=currencies
    )


@router.get(
    "/currencies/popular",
    response_model=list[PopularCurrencyResponse],
    summary="Popular currencies with their names"
)
async def popular_currencies(
    engine: Annotated[ConversionEngine, Depends(get_conversion_engine)]
):
    return [PopularCurrencyResponse(code=c.code, name=c.name) for c in engine.popular_currencies()]


@router.get(
    "/currencies/{code}/validate",
    response_model=CurrencyValidationResponse,
    summary="Check whether a currency code is supported"
)
async def validate_currency(
    code: str,
    engine: Annotated[ConversionEngine, Depends(get_conversion_engine)]
):
    return CurrencyValidationResponse(
        code=code.strip().upper(),
        valid=await engine.is_valid_code(code)
    )
