"""CSV export of stored leads."""

import csv
import io
from typing import Iterable, Union

from leadscout.services.leadgen.models import Lead

CSV_COLUMNS = [
    ("Full Name", "full_name"),
    ("Job Title", "job_title"),
    ("Company", "company_name"),
    ("Location", "location"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("LinkedIn URL", "linkedin_url"),
]

CSV_HEADERS = [header for header, _ in CSV_COLUMNS]


def _field(lead: Union[Lead, dict], key: str) -> str:
    value = lead.get(key) if isinstance(lead, dict) else getattr(lead, key, None)
    return "" if value is None else str(value)


def leads_to_csv(leads: Iterable[Union[Lead, dict]]) -> str:
    """Render leads as CSV with every field quoted (embedded quotes doubled)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(CSV_HEADERS)
    for lead in leads:
        writer.writerow([_field(lead, key) for _, key in CSV_COLUMNS])
    return buffer.getvalue()


def read_leads_csv(content: str) -> list[dict]:
    """Parse an export back into dicts keyed by lead field name."""
    reader = csv.reader(io.StringIO(content, newline=""))
    rows = list(reader)
    if not rows:
        return []
    header, body = rows[0], rows[1:]
    if header != CSV_HEADERS:
        raise ValueError(f"Unexpected CSV header: {header}")
    keys = [key for _, key in CSV_COLUMNS]
    return [dict(zip(keys, row)) for row in body]


def export_filename(job_id: str, timestamp_ms: int) -> str:
    return f"leads-{job_id[:8]}-{timestamp_ms}.csv"
