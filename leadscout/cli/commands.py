import asyncio
from pathlib import Path
from typing import Optional

import typer

from leadscout.config import settings
from leadscout.db.db import close_pool, create_schema
from leadscout.services.leadgen.models import RunStats, SearchRequest
from leadscout.services.leadgen.service import Service

app = typer.Typer(help="Find LinkedIn leads, enrich them and export to CSV.")


def _service() -> Service:
    return Service(
        serpapi_key=settings.serpapi_key,
        contactout_api_key=settings.contactout_api_key,
        rocketreach_api_key=settings.rocketreach_api_key,
        search_result_limit=settings.search_result_limit,
        company_result_limit=settings.company_result_limit,
        http_timeout=settings.http_timeout,
    )


def _print_stats(job_id: str, stats: RunStats) -> None:
    print(f"Job {job_id}: {stats.status.value}")
    if stats.error:
        print(f"Error: {stats.error}")
        return
    print(f"  Results found:     {stats.results_found}")
    print(f"  Profiles/pages:    {stats.profiles_found}")
    print(f"  Enriched:          {stats.enriched_count}")
    print(f"  From search title: {stats.fallback_count}")
    print(f"  Leads created:     {stats.leads_created}")
    print(f"  Companies created: {stats.companies_created}")
    print(f"  Skipped:           {stats.item_errors}")


def _run_search(request: SearchRequest) -> None:
    async def run():
        try:
            svc = _service()
            job = await svc.create_job(request)
            stats = await svc.run_job(job["id"])
            _print_stats(job["id"], stats)
        finally:
            await close_pool()

    asyncio.run(run())


def _build_request(**kwargs) -> SearchRequest:
    try:
        return SearchRequest(**kwargs)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.command()
def search_company(
    company: Optional[str] = typer.Option(None, "--company", "-c", help="Company name"),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Location"),
    roles: Optional[str] = typer.Option(
        None, "--roles", "-r", help="Role filter, e.g. 'CEO OR Founder'"
    ),
    provider: str = typer.Option(
        "contactout", "--provider", "-p", help="contactout or rocketreach"
    ),
):
    """
    Find people at a company and save them as leads.

    Examples:
        leadscout search-company --company "Acme" --location "Berlin"

        leadscout search-company -c Acme -r "CTO OR VP Engineering" -p rocketreach
    """
    _run_search(
        _build_request(
            search_type="company",
            company_name=company,
            location=location,
            business_type=roles,
            enrichment_provider=provider,
        )
    )


@app.command()
def search_name(
    full_name: str = typer.Argument(..., help="Person's full name"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Job title"),
    company: Optional[str] = typer.Option(None, "--company", "-c", help="Company name"),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Location"),
    provider: str = typer.Option(
        "contactout", "--provider", "-p", help="contactout or rocketreach"
    ),
):
    """Find a person by name and save the matching profiles as leads."""
    _run_search(
        _build_request(
            search_type="name",
            full_name=full_name,
            job_title=title,
            company_name=company,
            location=location,
            enrichment_provider=provider,
        )
    )


@app.command()
def find_companies(
    company: Optional[str] = typer.Option(None, "--company", "-c", help="Company name"),
    business_type: Optional[str] = typer.Option(
        None, "--type", "-t", help="Business type, e.g. 'logistics'"
    ),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Location"),
):
    """Find LinkedIn company pages and save what they expose."""
    _run_search(
        _build_request(
            search_type="company_page",
            company_name=company,
            business_type=business_type,
            location=location,
        )
    )


@app.command()
def job_status(job_id: str = typer.Argument(..., help="Job id")):
    """Show a job's status and lead count."""

    async def run():
        try:
            job = await _service().get_job(job_id)
        finally:
            await close_pool()
        if not job:
            print(f"Job {job_id} not found")
            raise typer.Exit(code=1)
        print(f"Job {job['id']}: {job['status']} ({job['lead_count']} leads)")
        if job.get("error_message"):
            print(f"Error: {job['error_message']}")

    asyncio.run(run())


@app.command()
def export_leads(
    job_id: str = typer.Argument(..., help="Job id"),
    output_dir: Path = typer.Option(Path("."), "--out", "-o", help="Output directory"),
):
    """Write a job's leads to a CSV file."""

    async def run():
        try:
            export = await _service().export_leads_csv(job_id)
        finally:
            await close_pool()
        if export is None:
            print("No leads found for this search")
            raise typer.Exit(code=1)
        filename, content = export
        path = output_dir / filename
        path.write_text(content, encoding="utf-8", newline="")
        print(f"Exported to {path}")

    asyncio.run(run())


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind host"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "leadscout.app:app",
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


@app.command()
def init_db():
    """Create the jobs, leads, companies and scrape_logs tables."""

    async def run():
        try:
            await create_schema()
        finally:
            await close_pool()
        print("Database schema is ready")

    asyncio.run(run())
