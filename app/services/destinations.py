"""
Static destination reference table used by the mock pricing path.
"""

from types import MappingProxyType
from typing import Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field


class Destination(BaseModel):
    """A destination served by the search endpoint."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=3, max_length=3, description="IATA airport code")
    city: str
    country: str
    flag: str = Field(..., description="Country flag emoji")


DEFAULT_BASE_PRICE = 600

_DESTINATIONS: Dict[str, Destination] = {
    "BCN": Destination(code="BCN", city="Barcelone", country="Espagne", flag="🇪🇸"),
    "LIS": Destination(code="LIS", city="Lisbonne", country="Portugal", flag="🇵🇹"),
    "MAD": Destination(code="MAD", city="Madrid", country="Espagne", flag="🇪🇸"),
    "FCO": Destination(code="FCO", city="Rome", country="Italie", flag="🇮🇹"),
    "CDG": Destination(code="CDG", city="Paris", country="France", flag="🇫🇷"),
    "LHR": Destination(code="LHR", city="Londres", country="Royaume-Uni", flag="🇬🇧"),
    "DUB": Destination(code="DUB", city="Dublin", country="Irlande", flag="🇮🇪"),
    "AMS": Destination(code="AMS", city="Amsterdam", country="Pays-Bas", flag="🇳🇱"),
    "MEX": Destination(code="MEX", city="Mexico City", country="Mexique", flag="🇲🇽"),
    "BOG": Destination(code="BOG", city="Bogotá", country="Colombie", flag="🇨🇴"),
}

_BASE_PRICES: Dict[str, int] = {
    "BCN": 487,
    "LIS": 512,
    "MAD": 523,
    "FCO": 695,
    "CDG": 445,
    "LHR": 425,
    "DUB": 745,
    "AMS": 520,
    "MEX": 623,
    "BOG": 780,
}

# Read-only views, insertion order preserved
DESTINATIONS: Mapping[str, Destination] = MappingProxyType(_DESTINATIONS)
BASE_PRICES: Mapping[str, int] = MappingProxyType(_BASE_PRICES)


def get_base_price(code: str) -> int:
    """Base price in CAD for a destination code, or the default for unknown codes."""
    return BASE_PRICES.get(code, DEFAULT_BASE_PRICE)
