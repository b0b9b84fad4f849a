import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from leadscout.core.logging import (
    StructuredLogger,
    job_id_var,
    json_formatter,
    log_execution_time,
    log_http_request,
)


@pytest.mark.unit
class TestStructuredLogger:
    def test_bind_includes_context_vars(self):
        token = job_id_var.set("job-1")
        try:
            with patch("leadscout.core.logging.logger") as mock_logger:
                StructuredLogger.bind(provider="contactout")
            mock_logger.bind.assert_called_once_with(job_id="job-1", provider="contactout")
        finally:
            job_id_var.reset(token)

    def test_bind_drops_none(self):
        with patch("leadscout.core.logging.logger") as mock_logger:
            StructuredLogger.bind(extra=None)
        mock_logger.bind.assert_called_once_with()


@pytest.mark.unit
class TestLogExecutionTime:
    @pytest.mark.asyncio
    async def test_returns_result(self):
        @log_execution_time
        async def work(x):
            return x * 2

        assert await work(4) == 8
        assert work.__name__ == "work"

    @pytest.mark.asyncio
    async def test_reraises(self):
        @log_execution_time
        async def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await broken()

    def test_rejects_sync_functions(self):
        with pytest.raises(TypeError):
            log_execution_time(lambda: None)


@pytest.mark.unit
class TestLogHttpRequest:
    def test_error_status_warns(self):
        with patch.object(StructuredLogger, "warning") as warning, \
                patch.object(StructuredLogger, "debug") as debug:
            log_http_request("GET", "https://serpapi.com/search", status_code=429, duration=0.5)

        warning.assert_called_once()
        assert warning.call_args[1]["status_code"] == 429
        debug.assert_not_called()

    def test_success_is_debug(self):
        with patch.object(StructuredLogger, "warning") as warning, \
                patch.object(StructuredLogger, "debug") as debug:
            log_http_request("POST", "https://api.rocketreach.co", status_code=200)

        debug.assert_called_once()
        warning.assert_not_called()


@pytest.mark.unit
class TestJsonFormatter:
    def test_serializes_record(self):
        level = MagicMock()
        level.name = "INFO"
        record = {
            "time": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "level": level,
            "message": "Queued company search job",
            "name": "leadscout.services.leadgen.service",
            "function": "create_job",
            "line": 10,
            "extra": {"job_id": "job-1"},
            "exception": None,
        }

        fmt = json_formatter(record)

        assert fmt == "{extra[serialized]}\n"
        data = json.loads(record["extra"]["serialized"])
        assert data["level"] == "INFO"
        assert data["message"] == "Queued company search job"
        assert data["job_id"] == "job-1"
        assert data["timestamp"] == "2024-01-01T00:00:00+00:00"
