"""LeadGen API routes.

A bearer token is optional; when present, jobs and leads are stamped with the
token's user id and job listings are scoped to it.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException
from fastapi.responses import JSONResponse, Response
from loguru import logger
from pydantic import ValidationError

from leadscout.api.auth import AuthUser, get_optional_user
from leadscout.api.models.leadgen import (
    CompanyListResponse,
    CompanyResponse,
    ErrorResponse,
    JobListResponse,
    JobResponse,
    JobStatusResponse,
    LeadListResponse,
    LeadResponse,
    ScrapeResponse,
)
from leadscout.config import settings
from leadscout.services.leadgen import repo
from leadscout.services.leadgen.exceptions import LeadGenError
from leadscout.services.leadgen.models import SearchRequest
from leadscout.services.leadgen.service import Service

router = APIRouter(prefix="/api", tags=["leadgen"])


def _get_service() -> Service:
    return Service(
        serpapi_key=settings.serpapi_key,
        contactout_api_key=settings.contactout_api_key,
        rocketreach_api_key=settings.rocketreach_api_key,
        search_result_limit=settings.search_result_limit,
        company_result_limit=settings.company_result_limit,
        http_timeout=settings.http_timeout,
    )


def _validation_message(exc: ValidationError) -> str:
    message = exc.errors()[0]["msg"]
    return message.removeprefix("Value error, ")


def _not_found(message: str = "Job not found") -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={"error": "NOT_FOUND", "message": message},
    )


async def _log_scrape(payload: dict, status: int, error: Optional[str] = None) -> None:
    try:
        await repo.insert_scrape_log(payload, status, error)
    except Exception as e:
        logger.warning(f"Failed to write scrape log: {e}")


async def run_job_in_background(job_id: str) -> None:
    """Background task body: run the job, logging what cannot be stored on it."""
    try:
        await _get_service().run_job(job_id)
    except LeadGenError as e:
        logger.error(f"Job {job_id} could not run: {e}")


# ---------------------------------------------------------------------------
# Scrape
# ---------------------------------------------------------------------------


@router.post(
    "/scrape",
    response_model=ScrapeResponse,
    responses={400: {"description": "Invalid search parameters"}},
)
async def scrape(
    background_tasks: BackgroundTasks,
    body: dict = Body(...),
    current_user: Optional[AuthUser] = Depends(get_optional_user),
):
    """Queue a company, name or company-page search and run it in the background."""
    try:
        request = SearchRequest.model_validate(body)
    except ValidationError as e:
        message = _validation_message(e)
        await _log_scrape(body, 400, message)
        return JSONResponse(status_code=400, content={"success": False, "error": message})

    svc = _get_service()
    user_id = current_user.user_id if current_user else None
    try:
        job = await svc.create_job(request, user_id=user_id)
    except Exception as e:
        logger.exception("Failed to create job")
        message = f"Failed to create job: {e}"
        await _log_scrape(body, 400, message)
        return JSONResponse(status_code=400, content={"success": False, "error": message})

    background_tasks.add_task(run_job_in_background, job["id"])
    await _log_scrape(body, 200)

    return ScrapeResponse(job_id=job["id"], status=job["status"])


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


@router.get("/jobs", response_model=JobListResponse)
async def list_jobs(
    current_user: Optional[AuthUser] = Depends(get_optional_user),
):
    """All jobs (newest first) with lead counts."""
    svc = _get_service()
    rows = await svc.list_jobs(user_id=current_user.user_id if current_user else None)
    jobs = [JobResponse(**row) for row in rows]
    return JobListResponse(jobs=jobs, total=len(jobs))


@router.get(
    "/jobs/{job_id}",
    response_model=JobStatusResponse,
    responses={404: {"model": ErrorResponse, "description": "Not found"}},
)
async def get_job(job_id: UUID):
    """Current status of a job."""
    svc = _get_service()
    job = await svc.get_job(str(job_id))
    if not job:
        raise _not_found()
    return JobStatusResponse(job=JobResponse(**job))


@router.delete(
    "/jobs/{job_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse, "description": "Not found"}},
)
async def delete_job(job_id: UUID):
    """Delete a job and all of its leads."""
    svc = _get_service()
    if not await svc.delete_job(str(job_id)):
        raise _not_found()
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@router.get(
    "/jobs/{job_id}/leads",
    response_model=LeadListResponse,
    responses={404: {"model": ErrorResponse, "description": "Not found"}},
)
async def get_job_leads(job_id: UUID):
    svc = _get_service()
    rows = await svc.get_leads(str(job_id))
    if rows is None:
        raise _not_found()
    leads = [LeadResponse(**r) for r in rows]
    return LeadListResponse(job_id=str(job_id), leads=leads, total=len(leads))


@router.get(
    "/jobs/{job_id}/companies",
    response_model=CompanyListResponse,
    responses={404: {"model": ErrorResponse, "description": "Not found"}},
)
async def get_job_companies(job_id: UUID):
    svc = _get_service()
    rows = await svc.get_companies(str(job_id))
    if rows is None:
        raise _not_found()
    companies = [CompanyResponse(**r) for r in rows]
    return CompanyListResponse(
        job_id=str(job_id), companies=companies, total=len(companies)
    )


@router.get(
    "/jobs/{job_id}/export",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV export"},
        404: {"model": ErrorResponse, "description": "No leads"},
    },
)
async def export_job_leads(job_id: UUID):
    """Download a job's leads as CSV."""
    svc = _get_service()
    export = await svc.export_leads_csv(str(job_id))
    if export is None:
        raise _not_found("No leads found for this search")

    filename, content = export
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
