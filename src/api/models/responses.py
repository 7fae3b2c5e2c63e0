"""Pydantic response models for API endpoints."""

from datetime import date

from pydantic import BaseModel

from core.dates import format_display_date
from models.records import NoveltyRecord, TrainingRecord, raw_fields
from services.campaigns import StatusCounts, classify_status
from services.colors import developer_color, status_color


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "degraded"
    version: str
    record_count: int
    last_refresh: str | None = None  # ISO 8601 UTC
    refreshing: bool = False
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# SHARED
# =============================================================================


class RecordOut(BaseModel):
    """One feed record, with display dates and status metadata."""

    campaign: str | None = None
    coordinator: str | None = None
    developer: str | None = None
    application: str | None = None
    process_name: str | None = None
    status: str | None = None
    notes: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    actual_date: str | None = None
    request_date: str | None = None
    client: str | None = None
    segment: str | None = None
    menu_segment: str | None = None
    development_type: str | None = None
    name: str | None = None
    quantity: str | None = None
    material_date: str | None = None
    trainer: str | None = None
    observations: str | None = None
    start_display: str = ""
    end_display: str = ""
    status_category: str
    status_color: str

    @classmethod
    def from_record(cls, record: TrainingRecord) -> "RecordOut":
        return cls(
            **raw_fields(record),
            start_display=format_display_date(record.start_date),
            end_display=format_display_date(record.end_date),
            status_category=classify_status(record.status).value,
            status_color=status_color(record.status),
        )


class StatusCountsOut(BaseModel):
    completed: int
    in_progress: int
    pending: int

    @classmethod
    def from_counts(cls, counts: StatusCounts) -> "StatusCountsOut":
        return cls(
            completed=counts.completed,
            in_progress=counts.in_progress,
            pending=counts.pending,
        )


class RankedOut(BaseModel):
    name: str
    count: int
    related: int | None = None


class NoveltyOut(BaseModel):
    developer: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    note: str | None = None
    color: str

    @classmethod
    def from_novelty(cls, novelty: NoveltyRecord) -> "NoveltyOut":
        return cls(**raw_fields(novelty), color=developer_color(novelty.developer))


class DataState(BaseModel):
    """Feed state attached to every view."""

    has_data: bool
    data_error: str | None = None


# =============================================================================
# CALENDAR
# =============================================================================


class CampaignGroupOut(BaseModel):
    campaign: str
    color: str
    coordinator: str | None = None
    developer: str | None = None
    status: str | None = None
    is_start: bool = False
    is_end: bool = False
    developments: list[RecordOut] = []


class CalendarDayOut(BaseModel):
    day: date
    in_month: bool
    is_today: bool
    is_holiday: bool
    holiday_name: str | None = None
    event_count: int
    novelties: list[NoveltyOut] = []
    lanes: dict[str, list[CampaignGroupOut]] = {}


class ActiveCampaignOut(BaseModel):
    campaign: str
    color: str


class CampaignActivityOut(BaseModel):
    campaign: str
    color: str
    count: int
    developers: list[str]


class CalendarMonthResponse(DataState):
    year: int
    month: int
    label: str
    weekdays: list[str]
    days: list[CalendarDayOut]
    active_campaigns: list[ActiveCampaignOut]
    campaign_activity: list[CampaignActivityOut]


class DayDetailResponse(DataState):
    day: date
    is_holiday: bool
    holiday_name: str | None = None
    novelties: list[NoveltyOut] = []
    count: int
    records: list[RecordOut] = []


# =============================================================================
# CAMPAIGNS
# =============================================================================


class CampaignSummaryOut(BaseModel):
    campaign: str
    color: str
    total: int
    statuses: StatusCountsOut
    developers: list[str]
    coordinators: list[str]
    applications: list[str]
    clients: list[str]


class CampaignsResponse(DataState):
    total: int
    campaign_count: int
    developer_count: int
    client_count: int
    statuses: StatusCountsOut
    top_developers: list[RankedOut]
    top_campaigns: list[RankedOut]
    campaigns: list[CampaignSummaryOut]
    status_options: list[str]
    campaign_options: list[str]
    query: str | None = None
    result_count: int
    results: list[RecordOut]


# =============================================================================
# REPORTS
# =============================================================================


class PeriodOut(BaseModel):
    kind: str
    year: int
    index: int
    start: date
    end: date
    label: str


class ReportResponse(DataState):
    period: PeriodOut
    total: int
    statuses: StatusCountsOut
    campaign_count: int
    developer_count: int
    top_campaigns: list[RankedOut]
    top_developers: list[RankedOut]
    clients: list[RankedOut]
    records: list[RecordOut]


class RefreshResponse(BaseModel):
    refreshed: bool
    record_count: int
    loaded_at: str | None = None
    error: str | None = None
