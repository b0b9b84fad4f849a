from .leadgen import (
    ScrapeResponse,
    JobResponse,
    JobStatusResponse,
    JobListResponse,
    LeadResponse,
    LeadListResponse,
    CompanyResponse,
    CompanyListResponse,
    ErrorResponse,
)

__all__ = [
    "ScrapeResponse",
    "JobResponse",
    "JobStatusResponse",
    "JobListResponse",
    "LeadResponse",
    "LeadListResponse",
    "CompanyResponse",
    "CompanyListResponse",
    "ErrorResponse",
]
