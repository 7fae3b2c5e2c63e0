"""
Inclusive date-range checks used by the calendar and the reports.

Bounds may be raw cell strings or dates. A bound that is missing or fails to
parse makes every check return False. The record helpers compare the dates
resolved when the record was built and never re-read the raw cells.
"""

from datetime import date

from core.dates import as_date, same_day
from models.records import NoveltyRecord, TrainingRecord

DateLike = str | date | None


def is_date_within(day: DateLike, start: DateLike, end: DateLike) -> bool:
    """True iff start <= day <= end."""
    day_d, start_d, end_d = as_date(day), as_date(start), as_date(end)
    if day_d is None or start_d is None or end_d is None:
        return False
    return start_d <= day_d <= end_d


def intervals_overlap(
    a_start: DateLike, a_end: DateLike, b_start: DateLike, b_end: DateLike
) -> bool:
    """
    True when interval a shares at least one day with interval b.

    Checks that a starts inside b, ends inside b, or spans all of b.
    """
    a_start_d, a_end_d = as_date(a_start), as_date(a_end)
    b_start_d, b_end_d = as_date(b_start), as_date(b_end)
    if None in (a_start_d, a_end_d, b_start_d, b_end_d):
        return False

    starts_inside = b_start_d <= a_start_d <= b_end_d
    ends_inside = b_start_d <= a_end_d <= b_end_d
    spans = a_start_d <= b_start_d and a_end_d >= b_end_d
    return starts_inside or ends_inside or spans


def start_or_end_on(day: DateLike, start: DateLike, end: DateLike) -> tuple[bool, bool]:
    """Return (is_start, is_end) for a day against an interval."""
    start_d, end_d = as_date(start), as_date(end)
    if start_d is None or end_d is None:
        return False, False
    day_d = as_date(day)
    return same_day(start_d, day_d), same_day(end_d, day_d)


def record_active_on(record: TrainingRecord | NoveltyRecord, day: DateLike) -> bool:
    """Records without both dates are never active."""
    return is_date_within(day, record.start, record.end)


def record_overlaps(record: TrainingRecord, start: DateLike, end: DateLike) -> bool:
    return intervals_overlap(record.start, record.end, start, end)
