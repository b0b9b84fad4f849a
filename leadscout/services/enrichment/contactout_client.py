"""ContactOut API client for LinkedIn profile enrichment.

ContactOut API: https://api.contactout.com/
Endpoint: GET /v1/linkedin/enrich?profile=<linkedin url>, authenticated with a
``token`` header. Accounts without API access get a canned sample response,
which is treated as no data.
"""

import time
from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from leadscout.core.logging import log_http_request
from leadscout.services.enrichment.base import EnrichmentProvider
from leadscout.services.leadgen.models import Profile

DEMO_MESSAGE_MARKER = "sample response"
DEMO_PROFILE_NAME = "Example Person"


def is_demo_response(data: dict) -> bool:
    message = data.get("message")
    if isinstance(message, str) and DEMO_MESSAGE_MARKER in message:
        return True
    profile = data.get("profile")
    return isinstance(profile, dict) and profile.get("full_name") == DEMO_PROFILE_NAME


class ContactOutClient(EnrichmentProvider):
    """Client for the ContactOut LinkedIn enrich endpoint."""

    BASE_URL = "https://api.contactout.com/v1"
    name = "contactout"

    def __init__(self, api_key: Optional[str], timeout: float = 30.0):
        self.api_key = api_key
        self.timeout = timeout

    async def enrich(self, linkedin_url: str) -> Optional[Profile]:
        if not self.api_key:
            logger.warning("CONTACTOUT_API_KEY not configured")
            return None

        url = f"{self.BASE_URL}/linkedin/enrich"
        logger.info(f"ContactOut enriching: {linkedin_url}")

        start = time.time()
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    url,
                    params={"profile": linkedin_url},
                    headers={
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                        "token": self.api_key,
                    },
                )
                data = response.json()
            except httpx.HTTPError as e:
                logger.warning(f"ContactOut request failed for {linkedin_url}: {e}")
                return None
            except ValueError:
                logger.warning(f"ContactOut returned invalid JSON for {linkedin_url}")
                return None

        log_http_request(
            "GET", url, status_code=response.status_code, duration=time.time() - start
        )

        if not isinstance(data, dict):
            logger.warning(f"ContactOut returned an unexpected payload for {linkedin_url}")
            return None

        if is_demo_response(data):
            logger.warning("ContactOut returned demo data")
            return None

        if data.get("status_code") != 200 or not data.get("profile"):
            logger.info(
                f"ContactOut failed: {data.get('message') or data.get('error') or 'no profile'}"
            )
            return None

        try:
            profile = Profile.model_validate(data["profile"])
        except ValidationError as e:
            logger.warning(f"ContactOut profile for {linkedin_url} is malformed: {e}")
            return None

        logger.info(f"ContactOut enriched: {profile.full_name}")
        return profile
