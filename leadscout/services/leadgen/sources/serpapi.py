"""SerpAPI Google search source.

SerpAPI: https://serpapi.com/search-api
Returns Google organic results as JSON; vendor errors come back as an
``error`` key in the body.
"""

import time

import httpx
from loguru import logger

from leadscout.core.logging import log_http_request
from leadscout.services.leadgen.exceptions import ConfigurationError, SearchVendorError
from leadscout.services.leadgen.models import SearchResult
from leadscout.services.leadgen.sources.base import SearchSource

SERPAPI_URL = "https://serpapi.com/search"


class SerpApiSource(SearchSource):
    """Google web search through SerpAPI."""

    def __init__(self, api_key: str | None, timeout: float = 30.0):
        if not api_key:
            raise ConfigurationError("SERPAPI_KEY is not configured")
        self.api_key = api_key
        self.timeout = timeout
        self._api_calls = 0

    @property
    def api_calls(self) -> int:
        return self._api_calls

    async def search(self, query: str, num: int = 10) -> list[SearchResult]:
        params = {
            "engine": "google",
            "q": query,
            "api_key": self.api_key,
            "num": str(num),
        }
        logger.info(f"SerpAPI search query: {query}")

        start = time.time()
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            self._api_calls += 1
            try:
                resp = await client.get(SERPAPI_URL, params=params)
                data = resp.json()
            except httpx.HTTPError as e:
                raise SearchVendorError(f"SerpAPI request failed: {e}") from e
            except ValueError as e:
                raise SearchVendorError("SerpAPI returned invalid JSON") from e

        log_http_request(
            "GET", SERPAPI_URL, status_code=resp.status_code, duration=time.time() - start
        )

        if not isinstance(data, dict):
            raise SearchVendorError("SerpAPI returned an unexpected payload")
        if data.get("error"):
            raise SearchVendorError(f"SerpAPI Error: {data['error']}")
        if resp.status_code != 200:
            raise SearchVendorError(f"SerpAPI Error: HTTP {resp.status_code}")

        organic = data.get("organic_results") or []
        results = [
            SearchResult(
                title=item.get("title") or "",
                link=item.get("link") or "",
                snippet=item.get("snippet") or "",
            )
            for item in organic
            if isinstance(item, dict)
        ]
        logger.info(f"SerpAPI found {len(results)} results")
        return results
