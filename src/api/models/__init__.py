"""API Pydantic models."""

from .responses import (
    CalendarMonthResponse,
    CampaignsResponse,
    DayDetailResponse,
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    RefreshResponse,
    ReportResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "CalendarMonthResponse",
    "DayDetailResponse",
    "CampaignsResponse",
    "ReportResponse",
    "RefreshResponse",
]
