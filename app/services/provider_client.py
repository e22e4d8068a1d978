"""
Async client for the external scraping service.

A search is a single POST to ``{base_url}/search`` bounded by a deadline.
Failures are returned as values instead of raised, so callers decide what
a provider outage means for them.
"""

import asyncio
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from app.core.error_handler import ErrorCode, ErrorHandler, error_handler as default_error_handler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSuccess:
    """Decoded JSON body returned by the provider, untouched."""
    data: Any


@dataclass(frozen=True)
class ProviderFailure:
    """Why the provider call did not produce a usable body."""
    error_code: ErrorCode
    message: str
    exception: Optional[BaseException] = None


ProviderResult = Union[ProviderSuccess, ProviderFailure]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number {name} in provider response")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Out of range number {text} in provider response")
    return value


def _decode_strict(content: bytes) -> Any:
    """Decode a JSON body, rejecting NaN and Infinity."""
    return json.loads(content, parse_constant=_reject_constant, parse_float=_parse_finite_float)


class ProviderClient:
    """
    Client for the scraping service's search endpoint.

    No retries: one request per search, cancelled once ``timeout`` seconds
    have elapsed.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        errors: Optional[ErrorHandler] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.errors = errors or default_error_handler

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/search"

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _post_search(self, payload: Dict[str, Any]) -> Any:
        response = await self.client.post(
            self.search_url,
            json=payload,
            headers=self._get_headers()
        )
        if not response.is_success:
            raise httpx.HTTPStatusError(
                f"API returned {response.status_code}",
                request=response.request,
                response=response
            )
        return _decode_strict(response.content)

    async def search(self, payload: Dict[str, Any]) -> ProviderResult:
        """
        Forward a search payload to the provider.

        Args:
            payload: Request fields to send as the JSON body

        Returns:
            ProviderSuccess with the decoded body, or ProviderFailure
        """
        logger.debug(f"POST {self.search_url} with {payload}")
        try:
            data = await asyncio.wait_for(self._post_search(payload), timeout=self.timeout)
        except Exception as e:
            error_code, message = self.errors.classify_provider_error(e)
            return ProviderFailure(error_code=error_code, message=message, exception=e)

        return ProviderSuccess(data=data)

    async def close(self) -> None:
        """Close the HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
