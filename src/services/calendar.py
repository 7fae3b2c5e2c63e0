"""
Calendar view: month grid, per-day activity, holidays and novelties.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta

from core.config import (
    BREACH_STATUS,
    MAX_GROUPS_PER_LANE,
    NO_CAMPAIGN_LABEL,
    UPDATE_DEVELOPMENT_TYPE,
)
from core.dates import same_day
from core.intervals import record_active_on, record_overlaps
from models.records import HolidayRecord, NoveltyRecord, TrainingRecord


# =============================================================================
# GRID
# =============================================================================


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def month_grid(year: int, month: int) -> list[date]:
    """
    Days shown for a month: Monday-first weeks with Sundays left out.

    Starts on the Monday on/before the 1st and ends on the Saturday
    on/after the last day of the month.
    """
    first, last = month_bounds(year, month)
    grid_start = first - timedelta(days=first.weekday())
    grid_end = last + timedelta(days=6 - last.weekday())
    return working_days(grid_start, grid_end)


def working_days(start: date, end: date) -> list[date]:
    """Grid days (no Sundays) between start and end, inclusive."""
    days = []
    current = start
    while current <= end:
        if current.weekday() != calendar.SUNDAY:
            days.append(current)
        current += timedelta(days=1)
    return days


# =============================================================================
# PER-DAY LOOKUPS
# =============================================================================


@dataclass(frozen=True)
class HolidayMatch:
    is_holiday: bool
    name: str | None = None


def holiday_on(day: date, holidays: list[HolidayRecord]) -> HolidayMatch:
    """First holiday on the day wins when the sheet lists duplicates."""
    for holiday in holidays:
        if same_day(holiday.day, day):
            return HolidayMatch(True, holiday.name)
    return HolidayMatch(False)


def novelties_on(day: date, novelties: list[NoveltyRecord]) -> list[NoveltyRecord]:
    return [n for n in novelties if record_active_on(n, day)]


def records_on(day: date, records: list[TrainingRecord]) -> list[TrainingRecord]:
    return [r for r in records if record_active_on(r, day)]


# =============================================================================
# CAMPAIGN GROUPS
# =============================================================================


@dataclass
class CampaignGroup:
    """Records of one campaign active on a day."""

    campaign: str
    coordinator: str | None
    developer: str | None
    material_date: str | None
    start: date | None
    end: date | None
    developments: list[TrainingRecord] = field(default_factory=list)

    @property
    def statuses(self) -> list[str | None]:
        return [d.status for d in self.developments]


def group_by_campaign(records: list[TrainingRecord]) -> list[CampaignGroup]:
    """Group by campaign in first-seen order; header fields come from the first record."""
    grouped: dict[str, CampaignGroup] = {}
    for record in records:
        key = record.campaign or NO_CAMPAIGN_LABEL
        if key not in grouped:
            grouped[key] = CampaignGroup(
                campaign=key,
                coordinator=record.coordinator,
                developer=record.developer,
                material_date=record.material_date,
                start=record.start,
                end=record.end,
            )
        grouped[key].developments.append(record)
    return list(grouped.values())


def group_status(group: CampaignGroup) -> str | None:
    """Most relevant status of a group: in progress, then finished, then delivered."""
    lowered = {s.lower() for s in group.statuses if s}
    if "en proceso" in lowered:
        return "En Proceso"
    if "finalizado" in lowered:
        return "Finalizado"
    if "entregado" in lowered:
        return "Entregado"
    return group.statuses[0] if group.statuses else None


def _is_update(group: CampaignGroup) -> bool:
    return any(
        (d.development_type or "").upper() == UPDATE_DEVELOPMENT_TYPE
        for d in group.developments
    )


def _is_breach(group: CampaignGroup) -> bool:
    return any((d.status or "").lower() == BREACH_STATUS for d in group.developments)


def split_lanes(
    groups: list[CampaignGroup], limit: int = MAX_GROUPS_PER_LANE
) -> dict[str, list[CampaignGroup]]:
    """
    Split a day's groups into display lanes.

    regular: no update development; updates: update development and no
    breach; breaches: any breach status. A breached update only shows
    under breaches.
    """
    return {
        "regular": [g for g in groups if not _is_update(g)][:limit],
        "updates": [g for g in groups if _is_update(g) and not _is_breach(g)][:limit],
        "breaches": [g for g in groups if _is_breach(g)][:limit],
    }


# =============================================================================
# ACTIVE CAMPAIGNS
# =============================================================================


@dataclass
class CampaignActivity:
    campaign: str
    count: int = 0
    developers: set[str] = field(default_factory=set)


def active_campaigns_in_period(
    records: list[TrainingRecord], month_start: date, month_end: date
) -> list[CampaignActivity]:
    """
    Tally campaign activity day by day over the grid days of a range.

    A campaign active on 20 grid days counts 20. Sundays are not on the
    grid and do not count. Sorted by campaign name.
    """
    tally: dict[str, CampaignActivity] = {}
    for day in working_days(month_start, month_end):
        for record in records_on(day, records):
            if not record.campaign:
                continue
            activity = tally.setdefault(record.campaign, CampaignActivity(record.campaign))
            activity.count += 1
            if record.developer:
                activity.developers.add(record.developer)
    return [tally[name] for name in sorted(tally)]


def campaigns_in_month(
    records: list[TrainingRecord], month_start: date, month_end: date
) -> list[str]:
    """Distinct campaign names whose interval overlaps the range, sorted."""
    return sorted(
        {
            r.campaign
            for r in records
            if r.campaign and record_overlaps(r, month_start, month_end)
        }
    )


# =============================================================================
# MONTH VIEW
# =============================================================================


@dataclass
class CalendarDay:
    day: date
    in_month: bool
    is_today: bool
    holiday: HolidayMatch
    novelties: list[NoveltyRecord]
    events: list[TrainingRecord]
    lanes: dict[str, list[CampaignGroup]]


def build_calendar_day(
    day: date,
    month: int,
    records: list[TrainingRecord],
    holidays: list[HolidayRecord],
    novelties: list[NoveltyRecord],
    today: date,
) -> CalendarDay:
    events = records_on(day, records)
    return CalendarDay(
        day=day,
        in_month=day.month == month,
        is_today=day == today,
        holiday=holiday_on(day, holidays),
        novelties=novelties_on(day, novelties),
        events=events,
        lanes=split_lanes(group_by_campaign(events)),
    )


def build_calendar_month(
    year: int,
    month: int,
    records: list[TrainingRecord],
    holidays: list[HolidayRecord],
    novelties: list[NoveltyRecord],
    today: date | None = None,
) -> list[CalendarDay]:
    today = today or date.today()
    return [
        build_calendar_day(day, month, records, holidays, novelties, today)
        for day in month_grid(year, month)
    ]
