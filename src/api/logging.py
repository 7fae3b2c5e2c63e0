"""Per-request access logging for the API."""

import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from fastapi import Request

logger = logging.getLogger("api.requests")


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    query: str = ""
    client_ip: str | None = None
    status_code: int = 0
    error_message: str | None = None
    processing_time_ms: int = 0


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def log_request(log: RequestLog) -> None:
    """Emit one log line per request; 5xx responses log at error level."""
    level = logging.ERROR if log.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "%s %s -> %d (%d ms)",
        log.method,
        log.endpoint,
        log.status_code,
        log.processing_time_ms,
        extra={"request": asdict(log)},
    )
