"""Response models for the Flight Deal Search API."""

from pydantic import BaseModel, Field, ConfigDict


class Offer(BaseModel):
    """A single destination offer returned by the search endpoint."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "city": "Paris",
                "country": "France",
                "code": "CDG",
                "price": 445,
                "currency": "CAD",
                "flag": "🇫🇷"
            }
        }
    )

    city: str = Field(..., description="Destination city")
    country: str = Field(..., description="Destination country")
    code: str = Field(..., description="Destination airport code (IATA)")
    price: int = Field(..., description="Round-trip price", ge=0)
    currency: str = Field(default="CAD", description="Price currency")
    flag: str = Field(..., description="Country flag emoji")


class DestinationInfo(BaseModel):
    """Reference entry returned by the destinations endpoint."""

    code: str
    city: str
    country: str
    flag: str
    base_price: int = Field(..., description="Base price in CAD before jitter", ge=0)


class ErrorResponse(BaseModel):
    """Error response body; carries no detail beyond a fixed message."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Internal server error"
            }
        }
    )

    error: str = Field(default="Internal server error", description="Error message")
