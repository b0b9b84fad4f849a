"""RocketReach API client for LinkedIn profile enrichment.

RocketReach API: https://rocketreach.co/api
Endpoint: POST /v2/api/lookupProfile with ``{"linkedin_url": ...}``,
authenticated with an ``Api-Key`` header. The response is RocketReach's own
person shape and is transformed into a Profile here.
"""

import time
from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from leadscout.core.logging import log_http_request
from leadscout.services.enrichment.base import EnrichmentProvider
from leadscout.services.leadgen.models import ContactInfo, CompanyRef, Profile

WORK_EMAIL_TYPE = "professional"
PERSONAL_EMAIL_TYPE = "personal"


def _emails_of_type(emails: list, email_type: str) -> list:
    return [e for e in emails if isinstance(e, dict) and e.get("type") == email_type]


def transform_profile(data: dict[str, Any]) -> Profile:
    """Map a RocketReach person record onto the common Profile shape."""
    emails = data.get("emails") or []
    if not isinstance(emails, list):
        emails = [emails]
    phones = data.get("phones") or []
    if not isinstance(phones, list):
        phones = [phones]

    return Profile(
        full_name=data.get("name"),
        title=data.get("current_title"),
        company=CompanyRef(name=data.get("current_employer")),
        location=data.get("location") or None,
        contact_info=ContactInfo(
            emails=emails,
            work_emails=_emails_of_type(emails, WORK_EMAIL_TYPE),
            personal_emails=_emails_of_type(emails, PERSONAL_EMAIL_TYPE),
            phones=phones,
        ),
    )


class RocketReachClient(EnrichmentProvider):
    """Client for the RocketReach profile lookup endpoint."""

    BASE_URL = "https://api.rocketreach.co/v2/api"
    name = "rocketreach"

    def __init__(self, api_key: Optional[str], timeout: float = 30.0):
        self.api_key = api_key
        self.timeout = timeout

    async def enrich(self, linkedin_url: str) -> Optional[Profile]:
        if not self.api_key:
            logger.warning("ROCKETREACH_API_KEY not configured")
            return None

        url = f"{self.BASE_URL}/lookupProfile"
        logger.info(f"RocketReach enriching: {linkedin_url}")

        start = time.time()
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    url,
                    headers={
                        "Api-Key": self.api_key,
                        "Content-Type": "application/json",
                    },
                    json={"linkedin_url": linkedin_url},
                )
                data = response.json()
            except httpx.HTTPError as e:
                logger.warning(f"RocketReach request failed for {linkedin_url}: {e}")
                return None
            except ValueError:
                logger.warning(f"RocketReach returned invalid JSON for {linkedin_url}")
                return None

        log_http_request(
            "POST", url, status_code=response.status_code, duration=time.time() - start
        )

        if not isinstance(data, dict) or not data.get("name"):
            error = data.get("error") if isinstance(data, dict) else None
            logger.info(f"RocketReach failed: {error or 'No data returned'}")
            return None

        try:
            profile = transform_profile(data)
        except ValidationError as e:
            logger.warning(f"RocketReach profile for {linkedin_url} is malformed: {e}")
            return None

        logger.info(f"RocketReach enriched: {profile.full_name}")
        return profile
