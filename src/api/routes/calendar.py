"""Calendar view endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_store
from api.models.responses import (
    ActiveCampaignOut,
    CalendarDayOut,
    CalendarMonthResponse,
    CampaignActivityOut,
    CampaignGroupOut,
    DayDetailResponse,
    NoveltyOut,
    RecordOut,
)
from core.config import MONTH_NAMES, WEEKDAY_LABELS
from core.intervals import start_or_end_on
from services.calendar import (
    CalendarDay,
    CampaignGroup,
    active_campaigns_in_period,
    build_calendar_month,
    campaigns_in_month,
    group_status,
    holiday_on,
    month_bounds,
    novelties_on,
    records_on,
)
from services.colors import campaign_color
from services.store import RecordStore

router = APIRouter(prefix="/v1")


def group_out(day: date, group: CampaignGroup) -> CampaignGroupOut:
    is_start, is_end = start_or_end_on(day, group.start, group.end)
    return CampaignGroupOut(
        campaign=group.campaign,
        color=campaign_color(group.campaign),
        coordinator=group.coordinator,
        developer=group.developer,
        status=group_status(group),
        is_start=is_start,
        is_end=is_end,
        developments=[RecordOut.from_record(r) for r in group.developments],
    )


def day_out(cell: CalendarDay) -> CalendarDayOut:
    return CalendarDayOut(
        day=cell.day,
        in_month=cell.in_month,
        is_today=cell.is_today,
        is_holiday=cell.holiday.is_holiday,
        holiday_name=cell.holiday.name,
        event_count=len(cell.events),
        novelties=[NoveltyOut.from_novelty(n) for n in cell.novelties],
        lanes={
            lane: [group_out(cell.day, g) for g in groups]
            for lane, groups in cell.lanes.items()
        },
    )


@router.get("/calendar", response_model=CalendarMonthResponse)
async def calendar_month(
    year: int | None = Query(None, ge=1, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    store: RecordStore = Depends(get_store),
):
    """
    Month grid (Monday first, no Sundays) with per-day activity.

    `active_campaigns` lists distinct campaigns overlapping the month;
    `campaign_activity` counts active days per campaign.
    """
    today = date.today()
    year = year or today.year
    month = month or today.month
    snapshot = store.snapshot
    records = snapshot.records
    month_start, month_end = month_bounds(year, month)

    days = build_calendar_month(
        year, month, records, snapshot.holidays, snapshot.novelties, today=today
    )

    return CalendarMonthResponse(
        has_data=snapshot.has_data,
        data_error=store.last_error,
        year=year,
        month=month,
        label=f"{MONTH_NAMES[month - 1]} {year}",
        weekdays=WEEKDAY_LABELS,
        days=[day_out(cell) for cell in days],
        active_campaigns=[
            ActiveCampaignOut(campaign=name, color=campaign_color(name))
            for name in campaigns_in_month(records, month_start, month_end)
        ],
        campaign_activity=[
            CampaignActivityOut(
                campaign=activity.campaign,
                color=campaign_color(activity.campaign),
                count=activity.count,
                developers=sorted(activity.developers),
            )
            for activity in active_campaigns_in_period(records, month_start, month_end)
        ],
    )


@router.get("/calendar/days/{day}", response_model=DayDetailResponse)
async def calendar_day(day: date, store: RecordStore = Depends(get_store)):
    """Records, holiday and novelties for one selected day."""
    snapshot = store.snapshot
    holiday = holiday_on(day, snapshot.holidays)
    records = records_on(day, snapshot.records)

    return DayDetailResponse(
        has_data=snapshot.has_data,
        data_error=store.last_error,
        day=day,
        is_holiday=holiday.is_holiday,
        holiday_name=holiday.name,
        novelties=[NoveltyOut.from_novelty(n) for n in novelties_on(day, snapshot.novelties)],
        count=len(records),
        records=[RecordOut.from_record(r) for r in records],
    )
