# Pydantic models for request/response validation

from .requests import SearchRequest
from .responses import Offer, DestinationInfo, ErrorResponse

__all__ = [
    "SearchRequest",
    "Offer",
    "DestinationInfo",
    "ErrorResponse"
]
