"""Abstract base class for web search sources."""

from abc import ABC, abstractmethod

from leadscout.services.leadgen.models import SearchResult


class SearchSource(ABC):
    """Base class for search vendors.

    Implementations: SerpApiSource.
    """

    @abstractmethod
    async def search(self, query: str, num: int = 10) -> list[SearchResult]:
        """Run a text query and return the organic results in rank order.

        Raises SearchVendorError when the vendor reports an error.
        """
        ...
