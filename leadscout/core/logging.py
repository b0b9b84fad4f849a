"""
Structured logging module using Loguru
"""

from loguru import logger
from contextvars import ContextVar
from typing import Optional
import json
from functools import wraps
import inspect
import time

# Context variables for job tracking
job_id_var: ContextVar[Optional[str]] = ContextVar("job_id", default=None)
user_id_var: ContextVar[Optional[str]] = ContextVar("user_id", default=None)


class StructuredLogger:
    """Wrapper for structured logging with context"""

    @staticmethod
    def bind(**kwargs):
        """Bind context to logger"""
        context = {
            "job_id": job_id_var.get(),
            "user_id": user_id_var.get(),
            **kwargs,
        }
        # Remove None values
        context = {k: v for k, v in context.items() if v is not None}
        return logger.bind(**context)

    @staticmethod
    def info(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).info(message)

    @staticmethod
    def error(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).error(message)

    @staticmethod
    def warning(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).warning(message)

    @staticmethod
    def debug(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).debug(message)

    @staticmethod
    def exception(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).exception(message)


def log_execution_time(func):
    """Decorator to log coroutine execution time"""

    @wraps(func)
    async def async_wrapper(*args, **kwargs):
        start = time.time()
        try:
            result = await func(*args, **kwargs)
            StructuredLogger.info(
                "Function executed successfully",
                function=func.__name__,
                duration=round(time.time() - start, 3),
                status="success",
            )
            return result
        except Exception as e:
            StructuredLogger.error(
                "Function failed",
                function=func.__name__,
                duration=round(time.time() - start, 3),
                status="error",
                error=str(e),
            )
            raise

    if not inspect.iscoroutinefunction(func):
        raise TypeError("log_execution_time only wraps coroutine functions")
    return async_wrapper


def log_http_request(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    **kwargs,
):
    """Log an outbound vendor HTTP request"""
    log_data = {"method": method, "url": url, "type": "http_request"}

    if status_code:
        log_data["status_code"] = status_code

    if duration:
        log_data["duration"] = round(duration, 3)

    log_data.update(kwargs)

    if status_code and status_code >= 400:
        StructuredLogger.warning("HTTP request failed", **log_data)
    else:
        StructuredLogger.debug("HTTP request completed", **log_data)


def json_formatter(record) -> str:
    """Loguru format function emitting one JSON document per line"""
    log_format = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["name"],
        "function": record["function"],
        "line": record["line"],
    }

    extra = {k: v for k, v in record["extra"].items() if k != "serialized"}
    log_format.update(extra)

    if record["exception"]:
        log_format["exception"] = str(record["exception"].value)

    record["extra"]["serialized"] = json.dumps(log_format, default=str)
    return "{extra[serialized]}\n"


structured_logger = StructuredLogger()
__all__ = [
    "logger",
    "structured_logger",
    "log_execution_time",
    "log_http_request",
    "json_formatter",
    "job_id_var",
    "user_id_var",
]
