"""Database repository for the leadgen service."""

import json
import uuid
from typing import Any, Iterable, Optional

from loguru import logger

from leadscout.db.db import db
from leadscout.services.leadgen.exceptions import (
    CompanyInsertionError,
    LeadInsertionError,
)
from leadscout.services.leadgen.models import Company, JobStatus, Lead

JOB_COLUMNS = "id, user_id, status, payload, result_id, error_message, created_at, updated_at"

LEAD_COLUMNS = (
    "id, job_id, user_id, full_name, first_name, last_name, job_title, "
    "company_name, location, email, phone, linkedin_url, created_at"
)

COMPANY_COLUMNS = (
    "id, job_id, user_id, company_name, linkedin_url, linkedin_id, industry, "
    "employee_count, headquarters, website, description, search_query, "
    "scraped_at, created_at"
)


def _to_dict(record: Any) -> Optional[dict]:
    """asyncpg Record -> plain dict with uuids as strings and JSON decoded."""
    if record is None:
        return None
    row = dict(record)
    for key, value in row.items():
        if isinstance(value, uuid.UUID):
            row[key] = str(value)
    for key in ("payload", "request_payload"):
        if isinstance(row.get(key), str):
            row[key] = json.loads(row[key])
    return row


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


async def create_job(payload: dict, user_id: Optional[str] = None) -> dict:
    """Insert a queued job and return the row."""
    record = await db.fetchrow(
        f"""
        INSERT INTO jobs (status, payload, user_id)
        VALUES ($1, $2::jsonb, $3::uuid)
        RETURNING {JOB_COLUMNS}
        """,
        JobStatus.QUEUED.value,
        json.dumps(payload),
        user_id,
    )
    job = _to_dict(record)
    logger.info(f"Created job {job['id']}")
    return job


async def get_job(job_id: str) -> Optional[dict]:
    record = await db.fetchrow(
        f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1::uuid", job_id
    )
    return _to_dict(record)


async def update_job_status(
    job_id: str,
    status: JobStatus,
    allowed_from: Iterable[JobStatus],
    result_id: Optional[str] = None,
    error_message: Optional[str] = None,
) -> Optional[dict]:
    """Move a job to ``status`` only if it is currently in ``allowed_from``.

    Returns the updated row, or None when the job is missing or in another state.
    """
    record = await db.fetchrow(
        f"""
        UPDATE jobs
        SET status = $2,
            result_id = COALESCE($3::uuid, result_id),
            error_message = $4,
            updated_at = now()
        WHERE id = $1::uuid AND status = ANY($5::text[])
        RETURNING {JOB_COLUMNS}
        """,
        job_id,
        status.value,
        result_id,
        error_message,
        [s.value for s in allowed_from],
    )
    return _to_dict(record)


async def list_jobs(user_id: Optional[str] = None) -> list[dict]:
    """Jobs, newest first, each with its lead count. Scoped to user when given."""
    records = await db.fetch(
        f"""
        SELECT {", ".join("j." + c.strip() for c in JOB_COLUMNS.split(","))},
               COUNT(l.id) AS lead_count
        FROM jobs j
        LEFT JOIN leads l ON l.job_id = j.id
        WHERE $1::uuid IS NULL OR j.user_id = $1::uuid
        GROUP BY j.id
        ORDER BY j.created_at DESC
        """,
        user_id,
    )
    return [_to_dict(r) for r in records]


async def delete_job(job_id: str) -> bool:
    """Delete a job; leads and companies cascade."""
    result = await db.execute("DELETE FROM jobs WHERE id = $1::uuid", job_id)
    deleted = result.endswith(" 1")
    if deleted:
        logger.info(f"Deleted job {job_id}")
    return deleted


# ---------------------------------------------------------------------------
# Leads
# ---------------------------------------------------------------------------


async def insert_lead(lead: Lead) -> dict:
    """Insert a normalized lead and return the stored row."""
    try:
        record = await db.fetchrow(
            f"""
            INSERT INTO leads
                (job_id, user_id, full_name, first_name, last_name, job_title,
                 company_name, location, email, phone, linkedin_url)
            VALUES ($1::uuid, $2::uuid, $3, $4, $5, $6, $7, $8, $9, $10, $11)
            RETURNING {LEAD_COLUMNS}
            """,
            lead.job_id,
            lead.user_id,
            lead.full_name,
            lead.first_name,
            lead.last_name,
            lead.job_title,
            lead.company_name,
            lead.location,
            lead.email,
            lead.phone,
            lead.linkedin_url,
        )
    except Exception as e:
        raise LeadInsertionError(
            f"Failed to insert lead {lead.linkedin_url}: {e}"
        ) from e
    return _to_dict(record)


async def get_leads_for_job(job_id: str) -> list[dict]:
    records = await db.fetch(
        f"SELECT {LEAD_COLUMNS} FROM leads WHERE job_id = $1::uuid ORDER BY created_at DESC",
        job_id,
    )
    return [_to_dict(r) for r in records]


async def count_leads_for_job(job_id: str) -> int:
    count = await db.fetchval(
        "SELECT COUNT(*) FROM leads WHERE job_id = $1::uuid", job_id
    )
    return count or 0


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------


async def insert_company(company: Company) -> dict:
    """Insert a scraped company page and return the stored row."""
    try:
        record = await db.fetchrow(
            f"""
            INSERT INTO companies
                (job_id, user_id, company_name, linkedin_url, linkedin_id,
                 industry, employee_count, headquarters, website, description,
                 search_query)
            VALUES ($1::uuid, $2::uuid, $3, $4, $5, $6, $7, $8, $9, $10, $11)
            RETURNING {COMPANY_COLUMNS}
            """,
            company.job_id,
            company.user_id,
            company.company_name,
            company.linkedin_url,
            company.linkedin_id,
            company.industry,
            company.employee_count,
            company.headquarters,
            company.website,
            company.description,
            company.search_query,
        )
    except Exception as e:
        raise CompanyInsertionError(
            f"Failed to insert company {company.linkedin_url}: {e}"
        ) from e
    return _to_dict(record)


async def get_companies_for_job(job_id: str) -> list[dict]:
    records = await db.fetch(
        f"SELECT {COMPANY_COLUMNS} FROM companies WHERE job_id = $1::uuid ORDER BY created_at DESC",
        job_id,
    )
    return [_to_dict(r) for r in records]


# ---------------------------------------------------------------------------
# Scrape logs
# ---------------------------------------------------------------------------


async def insert_scrape_log(
    request_payload: dict, response_status: int, error: Optional[str] = None
) -> None:
    """Record one /api/scrape request and its outcome."""
    await db.execute(
        """
        INSERT INTO scrape_logs (request_payload, response_status, error)
        VALUES ($1::jsonb, $2, $3)
        """,
        json.dumps(request_payload, default=str),
        response_status,
        error,
    )
