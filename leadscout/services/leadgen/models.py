"""Pydantic models for the leadgen service."""

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

UNKNOWN = "Unknown"
NOT_FOUND = "Not found"

DEFAULT_TARGET_ROLES = "CEO OR CFO OR Founder OR Owner OR Manager OR Director"


class JobStatus(str, Enum):
    """Lifecycle of a search job: queued -> processing -> completed | failed."""

    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)

    def can_transition_to(self, target: "JobStatus") -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS = {
    JobStatus.QUEUED: {JobStatus.PROCESSING, JobStatus.FAILED},
    JobStatus.PROCESSING: {JobStatus.COMPLETED, JobStatus.FAILED},
    JobStatus.COMPLETED: set(),
    JobStatus.FAILED: set(),
}


def _coerce_contact_item(item: Any) -> Optional[str]:
    """Vendors return contact entries either as strings or as small objects."""
    if item is None or isinstance(item, bool):
        return None
    if isinstance(item, dict):
        for key in ("email", "number", "phone", "value"):
            value = item.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None
    text = str(item).strip()
    return text or None


class ContactInfo(BaseModel):
    """Contact details attached to a vendor profile."""

    emails: list[str] = []
    work_emails: list[str] = []
    personal_emails: list[str] = []
    phones: list[str] = []

    @field_validator("emails", "work_emails", "personal_emails", "phones", mode="before")
    @classmethod
    def coerce_items(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            v = [v]
        return [c for c in (_coerce_contact_item(i) for i in v) if c]


class CompanyRef(BaseModel):
    name: Optional[str] = None


class Profile(BaseModel):
    """Vendor-neutral profile, produced by an enrichment vendor or a search result."""

    model_config = ConfigDict(extra="ignore")

    full_name: Optional[str] = None
    title: Optional[str] = None
    company: CompanyRef = Field(default_factory=CompanyRef)
    location: Optional[str] = None
    contact_info: ContactInfo = Field(default_factory=ContactInfo)

    @field_validator("company", mode="before")
    @classmethod
    def coerce_company(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, str):
            return {"name": v}
        return v

    @field_validator("contact_info", mode="before")
    @classmethod
    def coerce_contact_info(cls, v: Any) -> Any:
        return v if v is not None else {}


class Lead(BaseModel):
    """Normalized contact record. Every key is always present."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    job_id: Optional[str] = None
    user_id: Optional[str] = None
    full_name: str = UNKNOWN
    first_name: str = UNKNOWN
    last_name: str = ""
    job_title: str = UNKNOWN
    company_name: str = UNKNOWN
    location: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None


class Company(BaseModel):
    """A LinkedIn company page discovered by a company_page search."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    job_id: Optional[str] = None
    user_id: Optional[str] = None
    company_name: str
    linkedin_url: Optional[str] = None
    linkedin_id: str = "unknown"
    industry: str = NOT_FOUND
    employee_count: str = NOT_FOUND
    headquarters: str = NOT_FOUND
    website: str = NOT_FOUND
    description: Optional[str] = None
    search_query: Optional[str] = None


class SearchResult(BaseModel):
    """A single organic search result."""

    title: str = ""
    link: str = ""
    snippet: str = ""


SearchType = Literal["company", "name", "company_page"]
EnrichmentProviderName = Literal["contactout", "rocketreach"]


class SearchRequest(BaseModel):
    """Parameters submitted for a search job. Stored as the job payload."""

    model_config = ConfigDict(extra="ignore")

    search_type: SearchType = "company"
    company_name: Optional[str] = None
    location: Optional[str] = None
    business_type: Optional[str] = None
    full_name: Optional[str] = None
    job_title: Optional[str] = None
    enrichment_provider: EnrichmentProviderName = "contactout"

    @field_validator(
        "company_name", "location", "business_type", "full_name", "job_title",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @model_validator(mode="after")
    def validate_for_search_type(self) -> "SearchRequest":
        if self.search_type == "name":
            if not self.full_name:
                raise ValueError("Full name is required for name-based searches")
        elif not (self.company_name or self.location or self.business_type):
            raise ValueError("Please provide at least one search parameter")
        return self


class Job(BaseModel):
    """A search job row."""

    id: str
    status: JobStatus = JobStatus.QUEUED
    payload: Optional[dict] = None
    result_id: Optional[str] = None
    error_message: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RunStats(BaseModel):
    """Statistics for a completed job run."""

    status: JobStatus = JobStatus.PROCESSING
    results_found: int = 0
    profiles_found: int = 0
    enriched_count: int = 0
    fallback_count: int = 0
    leads_created: int = 0
    companies_created: int = 0
    item_errors: int = 0
    error: Optional[str] = None
