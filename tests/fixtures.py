"""
Test fixtures: sample search requests, provider responses and helpers for
pinning mock prices and faking the scraping service.
"""

import random
from typing import Any, Callable, Dict, List

import httpx


PROVIDER_URL = "http://scraper.test"


class FixedRandom(random.Random):
    """Random source that always returns the same value from random()."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


class SearchRequestFixtures:
    """Sample request bodies for the search endpoint."""

    MONTREAL_JULY: Dict[str, Any] = {"origin": "YUL", "budget": 500, "period": "july"}
    UNLIMITED: Dict[str, Any] = {"origin": "YUL", "budget": 5000, "period": "august"}
    ZERO_BUDGET: Dict[str, Any] = {"origin": "YYZ", "budget": 0, "period": "june"}
    STRING_BUDGET: Dict[str, Any] = {"origin": "YUL", "budget": "cheap", "period": "july"}


class ProviderResponseFixtures:
    """Bodies the scraping service may return."""

    OFFERS: List[Dict[str, Any]] = [
        {
            "city": "Lisbonne",
            "country": "Portugal",
            "code": "LIS",
            "price": 389,
            "currency": "CAD",
            "flag": "🇵🇹",
            "airline": "TAP",
        },
        {
            "city": "Paris",
            "country": "France",
            "code": "CDG",
            "price": 412,
            "currency": "CAD",
            "flag": "🇫🇷",
        },
    ]

    # Unexpected shape, still forwarded as-is
    UNSTRUCTURED: Dict[str, Any] = {"results": [], "note": "schema changed"}


def provider_transport(
    status_code: int = 200,
    json: Any = None,
    content: bytes = None,
    calls: List[httpx.Request] = None
) -> httpx.MockTransport:
    """Mock transport answering every request with a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=json)

    return httpx.MockTransport(handler)


def raising_transport(
    exc_factory: Callable[[httpx.Request], Exception],
    calls: List[httpx.Request] = None
) -> httpx.MockTransport:
    """Mock transport that raises for every request."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        raise exc_factory(request)

    return httpx.MockTransport(handler)
