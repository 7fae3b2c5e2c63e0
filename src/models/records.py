"""
Data models for feed records.

Records are frozen snapshots of one sheet row. The raw cell strings are kept
for display; the calendar dates are resolved once when the record is built
and every range check works on those.
"""

import datetime
from dataclasses import dataclass, field, fields

from core.dates import parse_record_date


def _resolved(default=None):
    return field(default=default, init=False, repr=False, compare=False)


def raw_fields(record) -> dict:
    """Sheet values only, without the resolved dates."""
    return {f.name: getattr(record, f.name) for f in fields(record) if f.init}


@dataclass(frozen=True)
class TrainingRecord:
    """One row of a training/process sheet."""

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
    # Training sheet only
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

    start: datetime.date | None = _resolved()
    end: datetime.date | None = _resolved()

    def __post_init__(self):
        object.__setattr__(self, "start", parse_record_date(self.start_date))
        object.__setattr__(self, "end", parse_record_date(self.end_date))


@dataclass(frozen=True)
class HolidayRecord:
    """Holiday row from the DATA sheet."""

    date: str | None = None
    name: str | None = None

    day: datetime.date | None = _resolved()

    def __post_init__(self):
        object.__setattr__(self, "day", parse_record_date(self.date))


@dataclass(frozen=True)
class NoveltyRecord:
    """Developer absence/incident active over a date range."""

    developer: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    note: str | None = None

    start: datetime.date | None = _resolved()
    end: datetime.date | None = _resolved()

    def __post_init__(self):
        object.__setattr__(self, "start", parse_record_date(self.start_date))
        object.__setattr__(self, "end", parse_record_date(self.end_date))
