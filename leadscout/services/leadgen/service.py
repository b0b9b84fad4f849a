"""LeadGen service: search, enrich, normalize and store leads for a job."""

import time
from abc import ABC, abstractmethod
from typing import Optional

from loguru import logger

from leadscout.core.logging import (
    job_id_var,
    log_execution_time,
    structured_logger,
    user_id_var,
)
from leadscout.services.enrichment.service import Service as EnrichmentService
from leadscout.services.leadgen import repo
from leadscout.services.leadgen.exceptions import (
    DatabaseError,
    InvalidJobTransitionError,
    JobNotFoundError,
    NoResultsError,
)
from leadscout.services.leadgen.export import export_filename, leads_to_csv
from leadscout.services.leadgen.models import (
    Job,
    JobStatus,
    RunStats,
    SearchRequest,
    SearchResult,
)
from leadscout.services.leadgen.normalizer import FallbackContext, normalize
from leadscout.services.leadgen.queries import (
    build_query,
    is_company_url,
    is_profile_url,
)
from leadscout.services.leadgen.sources.company_page import CompanyPageScraper
from leadscout.services.leadgen.sources.serpapi import SerpApiSource


class IService(ABC):
    """Interface for the leadgen service."""

    @abstractmethod
    async def create_job(
        self, request: SearchRequest, user_id: Optional[str] = None
    ) -> dict: ...

    @abstractmethod
    async def run_job(self, job_id: str) -> RunStats: ...

    @abstractmethod
    async def get_job(self, job_id: str) -> Optional[dict]: ...

    @abstractmethod
    async def list_jobs(self, user_id: Optional[str] = None) -> list[dict]: ...

    @abstractmethod
    async def get_leads(self, job_id: str) -> Optional[list[dict]]: ...

    @abstractmethod
    async def export_leads_csv(self, job_id: str) -> Optional[tuple[str, str]]: ...

    @abstractmethod
    async def delete_job(self, job_id: str) -> bool: ...


class Service(IService):
    """Find LinkedIn profiles for a search request and turn them into leads."""

    def __init__(
        self,
        serpapi_key: Optional[str],
        contactout_api_key: Optional[str] = None,
        rocketreach_api_key: Optional[str] = None,
        search_result_limit: int = 10,
        company_result_limit: int = 5,
        http_timeout: float = 30.0,
    ):
        self.serpapi_key = serpapi_key
        self.search_result_limit = search_result_limit
        self.company_result_limit = company_result_limit
        self.http_timeout = http_timeout
        self.enrichment = EnrichmentService(
            contactout_api_key=contactout_api_key,
            rocketreach_api_key=rocketreach_api_key,
            timeout=http_timeout,
        )

    # ------------------------------------------------------------------
    # Job lifecycle
    # ------------------------------------------------------------------

    async def create_job(
        self, request: SearchRequest, user_id: Optional[str] = None
    ) -> dict:
        """Persist a queued job whose payload is the search request."""
        job = await repo.create_job(request.model_dump(), user_id=user_id)
        logger.info(f"Queued {request.search_type} search job {job['id']}")
        return job

    async def _transition(
        self,
        job_id: str,
        status: JobStatus,
        result_id: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> dict:
        allowed_from = [s for s in JobStatus if s.can_transition_to(status)]
        row = await repo.update_job_status(
            job_id,
            status,
            allowed_from=allowed_from,
            result_id=result_id,
            error_message=error_message,
        )
        if row is None:
            raise InvalidJobTransitionError(
                f"Job {job_id} cannot move to {status.value}"
            )
        return row

    @log_execution_time
    async def run_job(self, job_id: str) -> RunStats:
        """Execute a queued job: search -> enrich -> normalize -> store.

        Per-item failures are logged and skipped. Anything that stops the job
        as a whole marks it failed with the error message.
        """
        row = await repo.get_job(job_id)
        if not row:
            raise JobNotFoundError(f"Job {job_id} not found")
        job = Job.model_validate(row)

        token = job_id_var.set(job_id)
        user_token = user_id_var.set(job.user_id)
        stats = RunStats()
        try:
            await self._transition(job_id, JobStatus.PROCESSING)
            try:
                request = SearchRequest.model_validate(job.payload or {})
                if request.search_type == "company_page":
                    result_id = await self._run_company_page_search(
                        job_id, request, job.user_id, stats
                    )
                else:
                    result_id = await self._run_profile_search(
                        job_id, request, job.user_id, stats
                    )
            except Exception as e:
                structured_logger.exception(f"Job {job_id} failed: {e}")
                await self._transition(job_id, JobStatus.FAILED, error_message=str(e))
                stats.status = JobStatus.FAILED
                stats.error = str(e)
                return stats

            await self._transition(job_id, JobStatus.COMPLETED, result_id=result_id)
            stats.status = JobStatus.COMPLETED
            structured_logger.info(
                f"Job {job_id} done: {stats.leads_created} leads, "
                f"{stats.companies_created} companies, {stats.item_errors} skipped"
            )
            return stats
        finally:
            user_id_var.reset(user_token)
            job_id_var.reset(token)

    async def _search(self, request: SearchRequest, num: int) -> tuple[str, list[SearchResult]]:
        source = SerpApiSource(api_key=self.serpapi_key, timeout=self.http_timeout)
        query = build_query(request)
        return query, await source.search(query, num=num)

    async def _run_profile_search(
        self,
        job_id: str,
        request: SearchRequest,
        user_id: Optional[str],
        stats: RunStats,
    ) -> Optional[str]:
        """Company and name searches: one lead per LinkedIn profile result."""
        structured_logger.info(f"Using enrichment provider: {request.enrichment_provider}")
        _, results = await self._search(request, self.search_result_limit)
        stats.results_found = len(results)

        if not results:
            if request.search_type == "name":
                raise NoResultsError("No LinkedIn profiles found for this name")
            raise NoResultsError("No LinkedIn profiles found")

        profile_results = [r for r in results if is_profile_url(r.link)]
        stats.profiles_found = len(profile_results)
        structured_logger.info(f"Extracted {len(profile_results)} LinkedIn URLs")
        if not profile_results:
            raise NoResultsError("Search returned no LinkedIn profile URLs")

        first_id = None
        for result in profile_results:
            try:
                profile = await self.enrichment.enrich(
                    result.link, request.enrichment_provider
                )
                if profile is None:
                    structured_logger.info(f"Using fallback for: {result.link}")
                    stats.fallback_count += 1
                else:
                    stats.enriched_count += 1

                lead = normalize(
                    profile,
                    FallbackContext(
                        company_name=request.company_name,
                        location=request.location,
                        full_name=request.full_name,
                        job_title=request.job_title,
                        search_title=result.title,
                        linkedin_url=result.link,
                        job_id=job_id,
                        user_id=user_id,
                    ),
                )
                row = await repo.insert_lead(lead)
            except Exception as e:
                stats.item_errors += 1
                structured_logger.warning(f"Failed to process {result.link}: {e}")
                continue

            stats.leads_created += 1
            first_id = first_id or row.get("id")

        structured_logger.info(f"Successfully processed {stats.leads_created} leads")
        return first_id

    async def _run_company_page_search(
        self,
        job_id: str,
        request: SearchRequest,
        user_id: Optional[str],
        stats: RunStats,
    ) -> Optional[str]:
        """Company page search: scrape each LinkedIn company page found."""
        query, results = await self._search(request, self.company_result_limit)
        stats.results_found = len(results)

        company_results = [r for r in results if is_company_url(r.link)]
        stats.profiles_found = len(company_results)

        scraper = CompanyPageScraper(timeout=self.http_timeout)
        first_id = None
        for result in company_results:
            try:
                company = await scraper.scrape(result, search_query=query)
                company.job_id = job_id
                company.user_id = user_id
                row = await repo.insert_company(company)
            except Exception as e:
                stats.item_errors += 1
                structured_logger.warning(f"Failed to scrape {result.link}: {e}")
                continue

            stats.companies_created += 1
            first_id = first_id or row.get("id")

        return first_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_job(self, job_id: str) -> Optional[dict]:
        """Job status document with its lead count, or None."""
        job = await repo.get_job(job_id)
        if not job:
            return None
        job["lead_count"] = await repo.count_leads_for_job(job_id)
        return job

    async def list_jobs(self, user_id: Optional[str] = None) -> list[dict]:
        return await repo.list_jobs(user_id=user_id)

    async def get_leads(self, job_id: str) -> Optional[list[dict]]:
        """Leads for a job. None if the job does not exist."""
        if not await repo.get_job(job_id):
            return None
        return await repo.get_leads_for_job(job_id)

    async def get_companies(self, job_id: str) -> Optional[list[dict]]:
        if not await repo.get_job(job_id):
            return None
        return await repo.get_companies_for_job(job_id)

    async def export_leads_csv(self, job_id: str) -> Optional[tuple[str, str]]:
        """(filename, csv text) for a job's leads, or None when there are none."""
        leads = await repo.get_leads_for_job(job_id)
        if not leads:
            return None
        filename = export_filename(job_id, int(time.time() * 1000))
        return filename, leads_to_csv(leads)

    async def delete_job(self, job_id: str) -> bool:
        try:
            return await repo.delete_job(job_id)
        except Exception as e:
            raise DatabaseError(f"Failed to delete job {job_id}: {e}") from e
