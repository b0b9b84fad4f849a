"""Unit tests for CSV export."""

import pytest

from leadscout.services.leadgen.export import (
    CSV_HEADERS,
    export_filename,
    leads_to_csv,
    read_leads_csv,
)
from leadscout.services.leadgen.models import Lead


@pytest.mark.unit
class TestLeadsToCsv:
    def test_header_only(self):
        assert leads_to_csv([]) == (
            '"Full Name","Job Title","Company","Location","Email","Phone","LinkedIn URL"\r\n'
        )

    def test_every_field_quoted_and_none_empty(self):
        lead = {
            "full_name": "Jane Doe",
            "job_title": "CEO",
            "company_name": "Acme",
            "location": None,
            "email": "jane@acme.com",
            "phone": None,
            "linkedin_url": "https://linkedin.com/in/jane",
        }
        lines = leads_to_csv([lead]).split("\r\n")
        assert lines[1] == (
            '"Jane Doe","CEO","Acme","","jane@acme.com","","https://linkedin.com/in/jane"'
        )

    def test_embedded_quotes_and_commas(self):
        lead = Lead(full_name='Jane "JD" Doe', company_name="Acme, Inc.")
        row = leads_to_csv([lead]).split("\r\n")[1]
        assert row.startswith('"Jane ""JD"" Doe","Unknown","Acme, Inc."')

    def test_round_trip(self):
        leads = [
            Lead(
                full_name='Jane "JD" Doe',
                job_title="VP, Sales",
                company_name="Acme\nLabs",
                location="Berlin",
                email="jane@acme.com",
                phone="+49 1",
                linkedin_url="https://linkedin.com/in/jane",
            ),
            Lead(full_name="John Smith"),
        ]
        rows = read_leads_csv(leads_to_csv(leads))

        assert len(rows) == 2
        assert rows[0]["full_name"] == 'Jane "JD" Doe'
        assert rows[0]["job_title"] == "VP, Sales"
        assert rows[0]["company_name"] == "Acme\nLabs"
        assert rows[1]["email"] == ""


@pytest.mark.unit
class TestReadLeadsCsv:
    def test_rejects_unknown_header(self):
        with pytest.raises(ValueError, match="Unexpected CSV header"):
            read_leads_csv('"Name","Email"\r\n')

    def test_empty(self):
        assert read_leads_csv("") == []

    def test_headers_constant(self):
        assert CSV_HEADERS[0] == "Full Name"
        assert CSV_HEADERS[-1] == "LinkedIn URL"


@pytest.mark.unit
class TestExportFilename:
    def test_format(self):
        name = export_filename("3f2b8c1a-0000-0000-0000-000000000000", 1700000000000)
        assert name == "leads-3f2b8c1a-1700000000000.csv"
