"""Profile enrichment service: routes a LinkedIn URL to the selected vendor."""

from abc import ABC, abstractmethod
from typing import Optional

from loguru import logger

from leadscout.services.enrichment.base import EnrichmentProvider
from leadscout.services.enrichment.contactout_client import ContactOutClient
from leadscout.services.enrichment.rocketreach_client import RocketReachClient
from leadscout.services.leadgen.exceptions import EnrichmentError
from leadscout.services.leadgen.models import Profile

DEFAULT_PROVIDER = "contactout"


class IService(ABC):
    """Service interface for profile enrichment."""

    @abstractmethod
    async def enrich(
        self, linkedin_url: str, provider: str = DEFAULT_PROVIDER
    ) -> Optional[Profile]:
        """Enrich one LinkedIn profile with the named vendor."""
        ...


class Service(IService):
    """Enrichment via ContactOut (default) or RocketReach."""

    def __init__(
        self,
        contactout_api_key: Optional[str] = None,
        rocketreach_api_key: Optional[str] = None,
        timeout: float = 30.0,
    ):
        self.providers: dict[str, EnrichmentProvider] = {
            ContactOutClient.name: ContactOutClient(contactout_api_key, timeout=timeout),
            RocketReachClient.name: RocketReachClient(rocketreach_api_key, timeout=timeout),
        }

    def get_provider(self, provider: str) -> EnrichmentProvider:
        try:
            return self.providers[provider]
        except KeyError:
            raise EnrichmentError(
                f"Unknown enrichment provider '{provider}'. "
                f"Available: {list(self.providers.keys())}"
            ) from None

    async def enrich(
        self, linkedin_url: str, provider: str = DEFAULT_PROVIDER
    ) -> Optional[Profile]:
        """Returns None when the vendor had nothing usable for this URL."""
        client = self.get_provider(provider)
        profile = await client.enrich(linkedin_url)
        if profile is None:
            logger.debug(f"No {provider} data for {linkedin_url}")
        return profile
