"""Lead normalization.

Reduces a vendor profile (or, when enrichment produced nothing, the title of the
search result the profile was found through) to a single Lead record. Field
resolution is first-non-empty-wins with a fixed fallback order, and nothing in
this module raises: missing data degrades to "Unknown" or None.
"""

import re
from typing import Any, Optional, Union

from loguru import logger
from pydantic import BaseModel, ValidationError

from leadscout.services.leadgen.models import (
    UNKNOWN,
    CompanyRef,
    Lead,
    Profile,
)

# "Jane Doe - CEO at Acme | LinkedIn"
_LINKEDIN_SUFFIX = re.compile(r"\s*\|\s*LinkedIn\s*$", re.IGNORECASE)
NAME_SEPARATOR = " - "
COMPANY_SEPARATOR = " at "


class FallbackContext(BaseModel):
    """What the pipeline knows about a profile apart from the vendor data."""

    company_name: Optional[str] = None
    location: Optional[str] = None
    # Search hints from a name search, used only when parsing a search title
    full_name: Optional[str] = None
    job_title: Optional[str] = None
    search_title: Optional[str] = None
    linkedin_url: Optional[str] = None
    job_id: Optional[str] = None
    user_id: Optional[str] = None


class ParsedTitle(BaseModel):
    full_name: Optional[str] = None
    job_title: Optional[str] = None
    company_name: Optional[str] = None


def first_non_empty(*values: Any) -> Optional[str]:
    """Return the first value that is a non-blank string, stripped."""
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def split_name(full_name: str) -> tuple[str, str]:
    """Split on the first space: ("Jane Mary Doe") -> ("Jane", "Mary Doe")."""
    first, _, rest = full_name.strip().partition(" ")
    return first, rest.strip()


def parse_search_title(title: Optional[str]) -> ParsedTitle:
    """Parse a LinkedIn search-result title.

    The trailing "| LinkedIn" marker is removed and the rest is split on " - "
    into at most two segments: the name, then "<role> at <company>" or just a
    role.
    """
    if not title:
        return ParsedTitle()

    cleaned = _LINKEDIN_SUFFIX.sub("", title).strip()
    segments = cleaned.split(NAME_SEPARATOR, 1)

    parsed = ParsedTitle(full_name=first_non_empty(segments[0]))
    if len(segments) < 2:
        return parsed

    role_company = segments[1].strip()
    if COMPANY_SEPARATOR in role_company:
        role, _, company = role_company.partition(COMPANY_SEPARATOR)
        parsed.job_title = first_non_empty(role)
        parsed.company_name = first_non_empty(company)
    else:
        parsed.job_title = first_non_empty(role_company)
    return parsed


def profile_from_search_title(context: FallbackContext) -> Profile:
    """Build a contact-less profile from the search title and the search hints."""
    parsed = parse_search_title(context.search_title)
    return Profile(
        full_name=first_non_empty(parsed.full_name, context.full_name),
        title=first_non_empty(parsed.job_title, context.job_title),
        company=CompanyRef(name=first_non_empty(parsed.company_name, context.company_name)),
        location=first_non_empty(context.location),
    )


def pick_email(profile: Profile) -> Optional[str]:
    contact = profile.contact_info
    return first_non_empty(
        *contact.work_emails[:1],
        *contact.personal_emails[:1],
        *contact.emails[:1],
    )


def pick_phone(profile: Profile) -> Optional[str]:
    return first_non_empty(*profile.contact_info.phones[:1])


def _coerce_profile(profile: Union[Profile, dict, None]) -> Optional[Profile]:
    if profile is None or isinstance(profile, Profile):
        return profile
    try:
        return Profile.model_validate(profile)
    except ValidationError as e:
        logger.warning(f"Discarding malformed profile data: {e.error_count()} errors")
        return None


def normalize(
    profile: Union[Profile, dict, None],
    context: Optional[FallbackContext] = None,
) -> Lead:
    """Reduce a profile to a Lead. Never raises."""
    context = context or FallbackContext()
    resolved = _coerce_profile(profile)
    if resolved is None:
        resolved = profile_from_search_title(context)

    full_name = first_non_empty(resolved.full_name) or UNKNOWN
    first_name, last_name = split_name(full_name)

    return Lead(
        job_id=context.job_id,
        user_id=context.user_id,
        full_name=full_name,
        first_name=first_name or UNKNOWN,
        last_name=last_name,
        job_title=first_non_empty(resolved.title) or UNKNOWN,
        company_name=first_non_empty(resolved.company.name, context.company_name) or UNKNOWN,
        location=first_non_empty(resolved.location, context.location),
        email=pick_email(resolved),
        phone=pick_phone(resolved),
        linkedin_url=context.linkedin_url,
    )
