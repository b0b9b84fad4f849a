"""Unit tests for leadgen models."""

import pytest
from pydantic import ValidationError

from leadscout.services.leadgen.models import (
    Company,
    ContactInfo,
    Job,
    JobStatus,
    Lead,
    Profile,
    SearchRequest,
)


@pytest.mark.unit
class TestJobStatus:
    def test_forward_transitions(self):
        assert JobStatus.QUEUED.can_transition_to(JobStatus.PROCESSING)
        assert JobStatus.PROCESSING.can_transition_to(JobStatus.COMPLETED)
        assert JobStatus.PROCESSING.can_transition_to(JobStatus.FAILED)
        assert JobStatus.QUEUED.can_transition_to(JobStatus.FAILED)

    def test_no_skipping_processing(self):
        assert not JobStatus.QUEUED.can_transition_to(JobStatus.COMPLETED)

    def test_terminal_states_are_final(self):
        for terminal in (JobStatus.COMPLETED, JobStatus.FAILED):
            assert terminal.is_terminal
            for target in JobStatus:
                assert not terminal.can_transition_to(target)

    def test_non_terminal(self):
        assert not JobStatus.QUEUED.is_terminal
        assert not JobStatus.PROCESSING.is_terminal

    def test_string_values(self):
        assert JobStatus("completed") is JobStatus.COMPLETED
        assert JobStatus.FAILED == "failed"


@pytest.mark.unit
class TestContactInfo:
    def test_none_becomes_empty(self):
        info = ContactInfo(emails=None, phones=None)
        assert info.emails == []
        assert info.phones == []

    def test_single_string(self):
        assert ContactInfo(emails="a@b.com").emails == ["a@b.com"]

    def test_objects_coerced(self):
        info = ContactInfo(
            emails=[{"email": "a@b.com", "type": "personal"}, {"value": "c@d.com"}],
            phones=[{"number": "555"}, {"phone": "666"}],
        )
        assert info.emails == ["a@b.com", "c@d.com"]
        assert info.phones == ["555", "666"]

    def test_blank_items_dropped(self):
        assert ContactInfo(emails=["", "  ", None, {"type": "x"}]).emails == []

    def test_scalar_values_wrapped(self):
        info = ContactInfo(phones=5551234, emails=5, work_emails=True)
        assert info.phones == ["5551234"]
        assert info.emails == ["5"]
        assert info.work_emails == []


@pytest.mark.unit
class TestProfile:
    def test_defaults(self):
        profile = Profile()
        assert profile.full_name is None
        assert profile.company.name is None
        assert profile.contact_info.work_emails == []

    def test_extra_fields_ignored(self):
        profile = Profile.model_validate({"full_name": "A", "linkedin_id": 7})
        assert profile.full_name == "A"

    def test_null_nested(self):
        profile = Profile.model_validate({"company": None, "contact_info": None})
        assert profile.company.name is None
        assert profile.contact_info.emails == []


@pytest.mark.unit
class TestLeadAndCompany:
    def test_lead_defaults(self):
        lead = Lead()
        assert lead.full_name == "Unknown"
        assert lead.first_name == "Unknown"
        assert lead.last_name == ""
        assert lead.email is None

    def test_company_defaults(self):
        company = Company(company_name="Acme")
        assert company.linkedin_id == "unknown"
        assert company.industry == "Not found"
        assert company.website == "Not found"


@pytest.mark.unit
class TestSearchRequest:
    def test_company_search(self):
        req = SearchRequest(search_type="company", company_name="Acme")
        assert req.enrichment_provider == "contactout"

    def test_defaults_to_company(self):
        assert SearchRequest(location="Berlin").search_type == "company"

    def test_name_search_requires_full_name(self):
        with pytest.raises(ValidationError, match="Full name is required"):
            SearchRequest(search_type="name", company_name="Acme")

    def test_blank_full_name_rejected(self):
        with pytest.raises(ValidationError, match="Full name is required"):
            SearchRequest(search_type="name", full_name="   ")

    def test_company_search_needs_a_parameter(self):
        with pytest.raises(ValidationError, match="at least one search parameter"):
            SearchRequest(search_type="company")

    def test_company_page_needs_a_parameter(self):
        with pytest.raises(ValidationError, match="at least one search parameter"):
            SearchRequest(search_type="company_page", company_name=" ")

    def test_blank_strings_become_none(self):
        req = SearchRequest(company_name="Acme", location="  ")
        assert req.location is None

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            SearchRequest(company_name="Acme", enrichment_provider="clearbit")

    def test_unknown_search_type_rejected(self):
        with pytest.raises(ValidationError):
            SearchRequest(search_type="email", company_name="Acme")

    def test_round_trips_through_payload(self):
        req = SearchRequest(search_type="name", full_name="Jane Doe", location="NYC")
        assert SearchRequest.model_validate(req.model_dump()) == req


@pytest.mark.unit
class TestJob:
    def test_from_row(self):
        job = Job.model_validate(
            {
                "id": "3f1c",
                "status": "processing",
                "payload": {"company_name": "Acme"},
                "user_id": None,
            }
        )
        assert job.status == JobStatus.PROCESSING
        assert job.payload == {"company_name": "Acme"}
        assert job.error_message is None

    def test_null_payload(self):
        assert Job(id="3f1c", payload=None).status == JobStatus.QUEUED
