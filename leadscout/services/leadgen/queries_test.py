"""Unit tests for search query builders."""

import pytest

from leadscout.services.leadgen.models import DEFAULT_TARGET_ROLES, SearchRequest
from leadscout.services.leadgen.queries import (
    build_company_page_query,
    build_company_query,
    build_name_query,
    build_query,
    is_company_url,
    is_profile_url,
)


@pytest.mark.unit
class TestBuildCompanyQuery:
    def test_company_and_location(self):
        req = SearchRequest(company_name="Acme", location="Berlin")
        assert build_company_query(req) == (
            f'site:linkedin.com/in "Acme" ({DEFAULT_TARGET_ROLES}) Berlin'
        )

    def test_custom_roles(self):
        req = SearchRequest(company_name="Acme", business_type="CTO OR CIO")
        assert build_company_query(req) == 'site:linkedin.com/in "Acme" (CTO OR CIO)'

    def test_location_only(self):
        req = SearchRequest(location="Paris")
        assert build_company_query(req) == (
            f"site:linkedin.com/in ({DEFAULT_TARGET_ROLES}) Paris"
        )


@pytest.mark.unit
class TestBuildNameQuery:
    def test_name_only(self):
        req = SearchRequest(search_type="name", full_name="Jane Doe")
        assert build_name_query(req) == 'site:linkedin.com/in "Jane Doe"'

    def test_all_hints(self):
        req = SearchRequest(
            search_type="name",
            full_name="Jane Doe",
            job_title="CEO",
            company_name="Acme",
            location="NYC",
        )
        assert build_name_query(req) == (
            'site:linkedin.com/in "Jane Doe" "CEO" "Acme" NYC'
        )


@pytest.mark.unit
class TestBuildCompanyPageQuery:
    def test_all_parts(self):
        req = SearchRequest(
            search_type="company_page",
            company_name="Acme",
            business_type="logistics",
            location="Dubai",
        )
        assert build_company_page_query(req) == (
            "site:linkedin.com/company Acme logistics in Dubai"
        )

    def test_type_only(self):
        req = SearchRequest(search_type="company_page", business_type="bakery")
        assert build_company_page_query(req) == "site:linkedin.com/company bakery"


@pytest.mark.unit
class TestBuildQuery:
    def test_dispatches_on_search_type(self):
        assert build_query(SearchRequest(search_type="name", full_name="A B")).startswith(
            "site:linkedin.com/in"
        )
        assert build_query(
            SearchRequest(search_type="company_page", company_name="Acme")
        ).startswith("site:linkedin.com/company")
        assert '"Acme"' in build_query(SearchRequest(company_name="Acme"))


@pytest.mark.unit
class TestUrlFilters:
    def test_profile_urls(self):
        assert is_profile_url("https://www.linkedin.com/in/jane-doe")
        assert not is_profile_url("https://www.linkedin.com/company/acme")
        assert not is_profile_url("https://example.com")
        assert not is_profile_url("")

    def test_company_urls(self):
        assert is_company_url("https://uk.linkedin.com/company/acme")
        assert not is_company_url("https://www.linkedin.com/in/jane")
