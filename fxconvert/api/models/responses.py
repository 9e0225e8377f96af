from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ConvertResponse(BaseModel):
    """Response model for currency conversion"""

    from_currency: str = Field(..., description="Source currency code")
    to_currency: str = Field(..., description="Target currency code")
    amount: float = Field(..., description="Original amount requested")
    converted_amount: float = Field(..., description="Converted amount, rounded to 2 decimal places")
    exchange_rate: float = Field(..., description="Exchange rate used for conversion")
    rate_display: str = Field(..., description="Exchange rate formatted to 6 decimal places")
    source: str | None = Field(None, description="Provider that supplied the rate table")
    timestamp: datetime | None = Field(None, description="When the rate table was fetched")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "from_currency": "USD",
                "to_currency": "EUR",
                "amount": 100.00,
                "converted_amount": 92.00,
                "exchange_rate": 0.92,
                "rate_display": "0.920000",
                "source": "ExchangeRateAPI",
                "timestamp": "2026-09-27T10:30:00Z"
            }
        }
    )


class RateInfoResponse(BaseModel):
    """Rates between two currencies in both directions"""

    from_currency: str
    to_currency: str
    exchange_rate: float = Field(..., description="1 unit of from_currency in to_currency")
    reverse_rate: float = Field(..., description="1 unit of to_currency in from_currency")
    rate_display: str
    reverse_rate_display: str


class RateTableResponse(BaseModel):
    base_currency: str
    rates: dict[str, float]
    source: str
    timestamp: datetime


class BatchConversionItemResponse(BaseModel):
    to_currency: str
    converted_amount: float | None = None
    exchange_rate: float | None = None
    error: str | None = None
    error_type: str | None = None


class BatchConvertResponse(BaseModel):
    from_currency: str
    amount: float
    results: list[BatchConversionItemResponse]


class CurrenciesResponse(BaseModel):
    base_currency: str
    count: int
    currencies: list[str]


class PopularCurrencyResponse(BaseModel):
    code: str
    name: str


class CurrencyValidationResponse(BaseModel):
    code: str
    valid: bool


class HealthResponse(BaseModel):
    """Response model for health check"""

    status: str = Field(..., description="Overall system status (healthy/not_initialized)")
    timestamp: datetime = Field(..., description="When health check was performed")
    services: dict[str, Any] = Field(..., description="Status of the rate source, cache and providers")


class ErrorResponse(BaseModel):
    """Standard error response model"""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC), description="When error occurred")
    path: str | None = Field(None, description="Request path")
