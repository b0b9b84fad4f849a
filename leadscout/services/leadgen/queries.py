"""Search query builders for LinkedIn profile and company discovery."""

from leadscout.services.leadgen.models import DEFAULT_TARGET_ROLES, SearchRequest

PROFILE_SITE = "site:linkedin.com/in"
COMPANY_SITE = "site:linkedin.com/company"

PROFILE_PATH = "linkedin.com/in/"
COMPANY_PATH = "linkedin.com/company/"


def build_company_query(request: SearchRequest) -> str:
    """People at a company: quoted company, role filter, then location."""
    query = PROFILE_SITE
    if request.company_name:
        query += f' "{request.company_name}"'
    roles = request.business_type or DEFAULT_TARGET_ROLES
    query += f" ({roles})"
    if request.location:
        query += f" {request.location}"
    return query


def build_name_query(request: SearchRequest) -> str:
    """A named person, optionally narrowed by title, company and location."""
    query = f'{PROFILE_SITE} "{request.full_name}"'
    if request.job_title:
        query += f' "{request.job_title}"'
    if request.company_name:
        query += f' "{request.company_name}"'
    if request.location:
        query += f" {request.location}"
    return query


def build_company_page_query(request: SearchRequest) -> str:
    query = COMPANY_SITE
    if request.company_name:
        query += f" {request.company_name}"
    if request.business_type:
        query += f" {request.business_type}"
    if request.location:
        query += f" in {request.location}"
    return query


def build_query(request: SearchRequest) -> str:
    if request.search_type == "name":
        return build_name_query(request)
    if request.search_type == "company_page":
        return build_company_page_query(request)
    return build_company_query(request)


def is_profile_url(link: str) -> bool:
    return bool(link) and PROFILE_PATH in link


def is_company_url(link: str) -> bool:
    return bool(link) and COMPANY_PATH in link
