"""Abstract base class for contact enrichment vendors."""

from abc import ABC, abstractmethod
from typing import Optional

from leadscout.services.leadgen.models import Profile


class EnrichmentProvider(ABC):
    """Maps a LinkedIn profile URL to a vendor-neutral Profile.

    Implementations: ContactOutClient, RocketReachClient.
    """

    name: str = ""

    @abstractmethod
    async def enrich(self, linkedin_url: str) -> Optional[Profile]:
        """Return the enriched profile, or None when the vendor has no usable data.

        Vendor and transport failures are logged and reported as None.
        """
        ...
