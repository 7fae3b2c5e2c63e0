"""
Column-to-field mapping for the sheets and the snapshot loader.

The mapping is positional. A column reordered upstream silently shifts
fields; nothing here checks the header row.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from core.config import FEED_SCHEMA, HOLIDAYS_SHEET, NOVELTIES_SHEET, RECORDS_SHEET
from core.sheets import Row, SheetClient
from models.records import HolidayRecord, NoveltyRecord, TrainingRecord

logger = logging.getLogger(__name__)

# =============================================================================
# COLUMN MAPS
# =============================================================================

PROCESS_COLUMNS = {
    "campaign": 0,
    "coordinator": 1,
    "application": 2,
    "process_name": 3,
    "status": 4,
    "start_date": 5,
    "end_date": 6,
    "actual_date": 7,
    "developer": 8,
    "notes": 9,
}

TRAINING_COLUMNS = {
    "request_date": 0,
    "coordinator": 1,
    "client": 2,
    "segment": 3,
    "developer": 4,
    "menu_segment": 5,
    "development_type": 6,
    "name": 7,
    "quantity": 8,
    "material_date": 9,
    "start_date": 10,
    "end_date": 11,
    "status": 12,
    "trainer": 13,
    "observations": 14,
    "campaign": 15,
}

FEED_SCHEMAS = {
    "process": PROCESS_COLUMNS,
    "training": TRAINING_COLUMNS,
}

HOLIDAY_COLUMNS = {"date": 3, "name": 4}
NOVELTY_COLUMNS = {"developer": 0, "start_date": 1, "end_date": 2, "note": 3}


def _pick(row: Row, columns: dict[str, int]) -> dict[str, str | None]:
    return {name: row[idx] if idx < len(row) else None for name, idx in columns.items()}


def row_to_record(row: Row, schema: str = FEED_SCHEMA) -> TrainingRecord:
    try:
        columns = FEED_SCHEMAS[schema]
    except KeyError:
        raise ValueError(f"Unknown feed schema '{schema}'. Expected one of: {sorted(FEED_SCHEMAS)}")
    return TrainingRecord(**_pick(row, columns))


def rows_to_records(rows: list[Row], schema: str = FEED_SCHEMA) -> list[TrainingRecord]:
    return [row_to_record(row, schema) for row in rows]


def rows_to_holidays(rows: list[Row]) -> list[HolidayRecord]:
    return [HolidayRecord(**_pick(row, HOLIDAY_COLUMNS)) for row in rows]


def rows_to_novelties(rows: list[Row]) -> list[NoveltyRecord]:
    return [NoveltyRecord(**_pick(row, NOVELTY_COLUMNS)) for row in rows]


# =============================================================================
# SNAPSHOT
# =============================================================================


@dataclass(frozen=True)
class Snapshot:
    """Everything one load cycle produced. Replaced wholesale, never mutated."""

    records: tuple[TrainingRecord, ...] = ()
    holidays: tuple[HolidayRecord, ...] = ()
    novelties: tuple[NoveltyRecord, ...] = ()
    loaded_at: datetime | None = None
    sequence: int = 0

    @property
    def has_data(self) -> bool:
        return bool(self.records)


@dataclass
class SheetNames:
    records: str = RECORDS_SHEET
    holidays: str = HOLIDAYS_SHEET
    novelties: str = NOVELTIES_SHEET


@dataclass
class FeedLoader:
    """
    Loads records, holidays and novelties in one go.

    Any FeedError aborts the whole load so that a snapshot never mixes old
    and new sheets.
    """

    client: SheetClient
    schema: str = FEED_SCHEMA
    sheets: SheetNames = field(default_factory=SheetNames)

    def __call__(self) -> Snapshot:
        records = rows_to_records(self.client.fetch_rows(self.sheets.records), self.schema)
        holidays = rows_to_holidays(self.client.fetch_rows(self.sheets.holidays))
        novelties = rows_to_novelties(self.client.fetch_rows(self.sheets.novelties))
        logger.info(
            "Loaded %d records, %d holidays, %d novelties",
            len(records),
            len(holidays),
            len(novelties),
        )
        return Snapshot(
            records=tuple(records),
            holidays=tuple(holidays),
            novelties=tuple(novelties),
            loaded_at=datetime.now(timezone.utc),
        )
