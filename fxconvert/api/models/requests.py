from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConvertRequest(BaseModel):
    """Request model for currency conversion"""

    from_currency: str = Field(..., min_length=3, max_length=3, description="Source currency code (e.g., 'USD')")
    to_currency: str = Field(..., min_length=3, max_length=3, description="Target currency code (e.g., 'EUR')")
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Amount to convert (must not be negative)")

    @field_validator('from_currency', 'to_currency')
    @classmethod
    def currency_must_be_uppercase(cls, v: str):
        return v.upper()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "from_currency": "USD",
                "to_currency": "EUR",
                "amount": 100.00
            }
        }
    )


class BatchConvertRequest(BaseModel):
    """Request model for converting one amount into several currencies"""

    from_currency: str = Field(..., min_length=3, max_length=3, description="Source currency code")
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Amount to convert")
    to_currencies: list[str] = Field(..., min_length=1, description="Target currency codes")

    @field_validator('from_currency')
    @classmethod
    def currency_must_be_uppercase(cls, v: str):
        return v.upper()

    @field_validator('to_currencies')
    @classmethod
    def strip_targets(cls, v: list[str]):
        return [code.strip().upper() for code in v]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "from_currency": "USD",
                "amount": 250,
                "to_currencies": ["EUR", "GBP", "JPY"]
            }
        }
    )
