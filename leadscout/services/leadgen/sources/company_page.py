"""LinkedIn company page scraper.

Fetches a public company page and pulls what the anonymous page exposes: the
page title, the meta description, and a few fields embedded in the page's
JSON-LD / inline JSON.
"""

import re
from typing import Optional

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from leadscout.services.leadgen.models import NOT_FOUND, Company, SearchResult

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DESCRIPTION_MAX_CHARS = 300

_LINKEDIN_SUFFIX = re.compile(r"\s*\|\s*LinkedIn\s*$", re.IGNORECASE)
INDUSTRY_RE = re.compile(r'"industry":"([^"]+)"')
EMPLOYEES_RE = re.compile(r"([\d,]+(?:-[\d,]+)?)\s*employees")
LOCALITY_RE = re.compile(r'"addressLocality":"([^"]+)"')
WEBSITE_RE = re.compile(r'"url":"(https?://(?!www\.linkedin)[^"]+)"')


def linkedin_company_id(url: str) -> str:
    """'https://www.linkedin.com/company/acme-inc/about' -> 'acme-inc'."""
    _, sep, rest = url.partition("/company/")
    if not sep:
        return "unknown"
    slug = rest.split("/")[0].split("?")[0]
    return slug or "unknown"


def _match(pattern: re.Pattern, html: str) -> str:
    match = pattern.search(html)
    return match.group(1) if match else NOT_FOUND


def parse_company_page(
    html: str, result: SearchResult, search_query: Optional[str] = None
) -> Company:
    """Build a Company from page HTML, falling back to the search result text."""
    soup = BeautifulSoup(html, "html.parser")

    title = ""
    if soup.title and soup.title.string:
        title = _LINKEDIN_SUFFIX.sub("", soup.title.string).strip()

    description = None
    meta = soup.find("meta", attrs={"name": "description"})
    if meta and meta.get("content"):
        description = meta["content"]
    description = (description or result.snippet or None)
    if description:
        description = description[:DESCRIPTION_MAX_CHARS]

    return Company(
        company_name=title or _LINKEDIN_SUFFIX.sub("", result.title).strip() or "Unknown",
        linkedin_url=result.link,
        linkedin_id=linkedin_company_id(result.link),
        industry=_match(INDUSTRY_RE, html),
        employee_count=_match(EMPLOYEES_RE, html),
        headquarters=_match(LOCALITY_RE, html),
        website=_match(WEBSITE_RE, html),
        description=description,
        search_query=search_query,
    )


class CompanyPageScraper:
    """Fetches and parses LinkedIn company pages one at a time."""

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout

    async def scrape(
        self, result: SearchResult, search_query: Optional[str] = None
    ) -> Company:
        """Fetch a company page.

        Non-200 pages (LinkedIn answers bots with 999) are still parsed, so the
        company falls back to the search result text. Transport errors
        propagate to the caller.
        """
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        ) as client:
            resp = await client.get(result.link)
            if resp.status_code != 200:
                logger.warning(f"Company page {result.link} returned {resp.status_code}")
            html = resp.text

        company = parse_company_page(html, result, search_query=search_query)
        logger.debug(f"Scraped company page {result.link}: {company.company_name}")
        return company
