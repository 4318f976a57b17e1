"""Structured Logging: JSON formatter, setup, and per-request access log.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, method, path, status_code, ...) surfaced when present
    - JSON format in production, human-readable in development
    - Exactly one access log line per HTTP request
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import Request

_EXTRA_FIELDS = (
    "error_code", "method", "path", "status_code", "latency_ms",
    "client_ip", "product_id", "attempt",
)

access_logger = logging.getLogger("products_crud.access")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y/%m/%d %H:%M:%S",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


async def log_requests(request: Request, call_next):
    """HTTP middleware: access log with client ip, method, uri, status, latency."""
    started = time.perf_counter()
    response = await call_next(request)
    latency_ms = round((time.perf_counter() - started) * 1000, 3)
    client_ip = request.client.host if request.client else None
    access_logger.info(
        f"ip={client_ip} method={request.method} uri={request.url.path} "
        f"status={response.status_code} latency={latency_ms}ms",
        extra={
            "client_ip": client_ip,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "latency_ms": latency_ms,
        },
    )
    return response
