"""Pydantic models for LeadGen API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from leadscout.services.leadgen.models import JobStatus


class ScrapeResponse(BaseModel):
    """POST /api/scrape response."""

    success: bool = True
    job_id: str
    status: JobStatus = JobStatus.QUEUED


class JobResponse(BaseModel):
    """A job and its current status."""

    id: str
    status: JobStatus
    payload: dict = {}
    result_id: Optional[str] = None
    error_message: Optional[str] = None
    user_id: Optional[str] = None
    lead_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobStatusResponse(BaseModel):
    """GET /api/jobs/{id} response."""

    success: bool = True
    job: JobResponse


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total: int


class LeadResponse(BaseModel):
    """Response for a single lead."""

    id: str
    job_id: str
    user_id: Optional[str] = None
    full_name: str
    first_name: str
    last_name: str
    job_title: str
    company_name: str
    location: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    created_at: Optional[datetime] = None


class LeadListResponse(BaseModel):
    """GET /api/jobs/{id}/leads response."""

    job_id: str
    leads: list[LeadResponse]
    total: int


class CompanyResponse(BaseModel):
    id: str
    company_name: str
    linkedin_url: Optional[str] = None
    linkedin_id: Optional[str] = None
    industry: Optional[str] = None
    employee_count: Optional[str] = None
    headquarters: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    search_query: Optional[str] = None


class CompanyListResponse(BaseModel):
    job_id: str
    companies: list[CompanyResponse]
    total: int


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    message: str
