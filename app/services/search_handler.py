"""
Flight search orchestration: delegate to the scraping service when one is
configured, otherwise (or when it fails) synthesize offers locally.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

import httpx

from app.core.config import Settings
from app.core.error_handler import ErrorHandler, error_handler as default_error_handler
from app.models.requests import SearchRequest
from app.models.responses import Offer
from app.services.destinations import DESTINATIONS
from app.services.mock_pricing import MockPricer
from app.services.provider_client import ProviderClient, ProviderFailure, ProviderSuccess

logger = logging.getLogger(__name__)


class SearchHandler:
    """
    Serves search requests from the provider or from mock data.

    Provider failures never reach the caller: they are logged and the mock
    path runs instead. Provider bodies are returned verbatim.
    """

    def __init__(
        self,
        provider_url: Optional[str] = None,
        provider_timeout: float = 60,
        mock_latency: float = 2.0,
        pricer: Optional[MockPricer] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        errors: Optional[ErrorHandler] = None
    ):
        self.provider_url = provider_url or None
        self.provider_timeout = provider_timeout
        self.mock_latency = mock_latency
        self.pricer = pricer or MockPricer()
        self.transport = transport
        self.sleep = sleep
        self.errors = errors or default_error_handler

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "SearchHandler":
        provider_config = settings.get_provider_config()
        return cls(
            provider_url=provider_config["base_url"] if provider_config["enabled"] else None,
            provider_timeout=provider_config["timeout"],
            mock_latency=settings.MOCK_LATENCY_SECONDS,
            **kwargs
        )

    @property
    def provider_enabled(self) -> bool:
        return self.provider_url is not None

    async def search(self, request: SearchRequest) -> Any:
        """
        Run a search.

        Args:
            request: Parsed search request

        Returns:
            The provider's JSON body on success, otherwise a list of offer
            dicts filtered by budget and sorted by ascending price
        """
        if self.provider_enabled:
            logger.info(f"Using scraping API: {self.provider_url}")

            async with ProviderClient(
                self.provider_url,
                timeout=self.provider_timeout,
                transport=self.transport,
                errors=self.errors
            ) as client:
                result = await client.search(request.provider_payload())

            if isinstance(result, ProviderSuccess):
                count = len(result.data) if isinstance(result.data, list) else "unknown"
                logger.info(f"Scraping API returned {count} destinations")
                return result.data

            if isinstance(result, ProviderFailure):
                self.errors.log_error(
                    error_code=result.error_code,
                    message=result.message,
                    url=client.search_url,
                    level=logging.WARNING
                )
                logger.info("Falling back to mock data")

        offers = await self.mock_search(request.budget_limit)
        return [offer.model_dump() for offer in offers]

    async def mock_search(self, budget: float) -> List[Offer]:
        """Simulated latency followed by generate_mock_offers."""
        logger.info("Using mock data")
        if self.mock_latency > 0:
            await self.sleep(self.mock_latency)
        return self.generate_mock_offers(budget)

    def generate_mock_offers(self, budget: float) -> List[Offer]:
        """
        Price every destination, keep those within budget, cheapest first.

        A NaN budget matches nothing.
        """
        offers = [
            Offer(
                city=destination.city,
                country=destination.country,
                code=code,
                price=self.pricer.get_mock_price(code),
                currency="CAD",
                flag=destination.flag
            )
            for code, destination in DESTINATIONS.items()
        ]
        affordable = [offer for offer in offers if offer.price <= budget]
        return sorted(affordable, key=lambda offer: offer.price)
