"""Request models for the Flight Deal Search API."""

import math
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class SearchRequest(BaseModel):
    """
    Search request body.

    Fields are untyped: the endpoint performs no schema
    validation, and whatever the caller sent is forwarded to the provider
    as-is. Absent fields stay unset.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "origin": "YUL",
                "budget": 500,
                "period": "july"
            }
        }
    )

    origin: Any = None
    budget: Any = None
    period: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "SearchRequest":
        """Build a request from a decoded JSON body."""
        if not isinstance(payload, dict):
            raise TypeError(f"Search payload must be a JSON object, got {type(payload).__name__}")
        return cls(**{key: payload[key] for key in ("origin", "budget", "period") if key in payload})

    @property
    def budget_limit(self) -> float:
        """Budget as a number; NaN when it cannot be read as one."""
        value = self.budget
        if isinstance(value, bool) or value is None:
            return math.nan
        try:
            return float(value)
        except OverflowError:
            # Integers beyond float range
            return math.inf if value > 0 else -math.inf
        except (TypeError, ValueError):
            return math.nan

    def provider_payload(self) -> Dict[str, Any]:
        """Fields to forward to the provider, exactly as supplied."""
        return self.model_dump(exclude_unset=True)
