"""
Campaign grouping, status buckets and the campaign lookup view.
"""

from collections import Counter
from dataclasses import dataclass, field, fields
from enum import Enum

from core.config import (
    COMPLETED_KEYWORDS,
    IN_PROGRESS_KEYWORDS,
    PENDING_KEYWORDS,
    TOP_N_LOOKUP,
)
from models.records import TrainingRecord


# =============================================================================
# STATUS TAXONOMY
# =============================================================================


class StatusCategory(str, Enum):
    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    PENDING = "pending"
    OTHER = "other"


_STATUS_PRECEDENCE = [
    (StatusCategory.COMPLETED, COMPLETED_KEYWORDS),
    (StatusCategory.IN_PROGRESS, IN_PROGRESS_KEYWORDS),
    (StatusCategory.PENDING, PENDING_KEYWORDS),
]


def classify_status(status: str | None) -> StatusCategory:
    """
    Map a free-text status onto one category.

    Substring match, case-insensitive, first matching category wins:
    completed ("completado", "terminado"), in progress ("curso", "proceso"),
    pending ("pendiente"). Everything else is OTHER.
    """
    if not status:
        return StatusCategory.OTHER
    text = status.lower()
    for category, keywords in _STATUS_PRECEDENCE:
        if any(keyword in text for keyword in keywords):
            return category
    return StatusCategory.OTHER


@dataclass
class StatusCounts:
    completed: int = 0
    in_progress: int = 0
    pending: int = 0

    def add(self, status: str | None):
        category = classify_status(status)
        if category is StatusCategory.COMPLETED:
            self.completed += 1
        elif category is StatusCategory.IN_PROGRESS:
            self.in_progress += 1
        elif category is StatusCategory.PENDING:
            self.pending += 1


def count_statuses(records: list[TrainingRecord]) -> StatusCounts:
    counts = StatusCounts()
    for record in records:
        counts.add(record.status)
    return counts


# =============================================================================
# AGGREGATION
# =============================================================================


@dataclass
class CampaignSummary:
    """Per-campaign totals. Buckets need not add up to total."""

    campaign: str
    total: int = 0
    statuses: StatusCounts = field(default_factory=StatusCounts)
    developers: set[str] = field(default_factory=set)
    coordinators: set[str] = field(default_factory=set)
    applications: set[str] = field(default_factory=set)
    clients: set[str] = field(default_factory=set)


def aggregate_by_campaign(records: list[TrainingRecord]) -> list[CampaignSummary]:
    """Group records by campaign, sorted by campaign name."""
    summaries: dict[str, CampaignSummary] = {}

    for record in records:
        if not record.campaign:
            continue
        summary = summaries.get(record.campaign)
        if summary is None:
            summary = summaries[record.campaign] = CampaignSummary(record.campaign)

        summary.total += 1
        summary.statuses.add(record.status)
        if record.developer:
            summary.developers.add(record.developer)
        if record.coordinator:
            summary.coordinators.add(record.coordinator)
        if record.application:
            summary.applications.add(record.application)
        if record.client:
            summary.clients.add(record.client)

    return [summaries[name] for name in sorted(summaries)]


def distinct_values(records: list[TrainingRecord], field_name: str) -> set[str]:
    return {value for r in records if (value := getattr(r, field_name))}


def top_counts(
    records: list[TrainingRecord], field_name: str, n: int | None = None
) -> list[tuple[str, int]]:
    """
    Count records per value of a field, most frequent first.

    Ties keep the order in which values first appear. ``n=None`` keeps all.
    """
    counts = Counter(value for r in records if (value := getattr(r, field_name)))
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return ranked if n is None else ranked[:n]


# =============================================================================
# CAMPAIGN LOOKUP VIEW
# =============================================================================


@dataclass
class LookupStats:
    total: int
    campaigns: int
    developers: int
    clients: int
    statuses: StatusCounts


def lookup_stats(records: list[TrainingRecord]) -> LookupStats:
    return LookupStats(
        total=len(records),
        campaigns=len(distinct_values(records, "campaign")),
        developers=len(distinct_values(records, "developer")),
        clients=len(distinct_values(records, "client")),
        statuses=count_statuses(records),
    )


def search_records(records: list[TrainingRecord], term: str | None) -> list[TrainingRecord]:
    """Keep records where any field contains the term (case-insensitive)."""
    if not term:
        return list(records)
    needle = term.lower()
    record_fields = [f.name for f in fields(TrainingRecord) if f.init]
    return [
        record
        for record in records
        if any(
            (value := getattr(record, name)) and needle in value.lower()
            for name in record_fields
        )
    ]


def filter_options(records: list[TrainingRecord]) -> dict[str, list[str]]:
    """Values for the status and campaign dropdowns."""
    statuses = list(dict.fromkeys(r.status for r in records if r.status))
    return {
        "statuses": statuses,
        "campaigns": sorted(distinct_values(records, "campaign")),
    }


def top_developers_and_campaigns(
    records: list[TrainingRecord], n: int = TOP_N_LOOKUP
) -> tuple[list[tuple[str, int]], list[tuple[str, int]]]:
    return top_counts(records, "developer", n), top_counts(records, "campaign", n)
