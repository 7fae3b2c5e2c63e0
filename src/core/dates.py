"""
Date parsing for sheet cells.

The feed carries dates in two encodings:

- gviz serialization ``Date(2025,0,15)``, where the month is zero-based
  (optionally followed by hour/minute/second components, which are ignored);
- ISO-8601 dates or datetimes, e.g. ``2025-01-15`` or ``2025-01-15T08:00:00Z``.

Both are classified once into a tagged value and resolved to a plain
``datetime.date``. Nothing in here raises: unparseable input yields ``None``
and a warning in the log.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime

logger = logging.getLogger(__name__)

LEGACY_MARKER = "Date("
LEGACY_PATTERN = re.compile(
    r"Date\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*\d+\s*)*\)"
)


@dataclass(frozen=True)
class LegacyDate:
    """``Date(Y,M,D)`` triple with the month still zero-based."""

    year: int
    month_index: int
    day: int

    def to_date(self) -> date:
        return date(self.year, self.month_index + 1, self.day)

    def display(self) -> str:
        return f"{self.day}/{self.month_index + 1}/{self.year}"


@dataclass(frozen=True)
class IsoDate:
    """ISO-8601 value; time of day and offset are not used for comparisons."""

    value: datetime

    def to_date(self) -> date:
        return self.value.date()

    def display(self) -> str:
        return f"{self.value.day}/{self.value.month}/{self.value.year}"


RawDate = LegacyDate | IsoDate


def classify_date_string(raw: str | None, warn: bool = True) -> RawDate | None:
    """Classify a cell string into one of the two encodings, or None."""
    if not raw or not raw.strip():
        return None

    text = raw.strip()
    if LEGACY_MARKER in text:
        match = LEGACY_PATTERN.search(text)
        if not match:
            if warn:
                logger.warning("Unrecognized legacy date %r", raw)
            return None
        year, month_index, day = (int(group) for group in match.groups())
        return LegacyDate(year, month_index, day)

    try:
        return IsoDate(datetime.fromisoformat(text))
    except ValueError:
        if warn:
            logger.warning("Unparseable ISO date %r", raw)
        return None


def parse_record_date(raw: str | None) -> date | None:
    """Parse a cell into a calendar date. Returns None on any failure."""
    tagged = classify_date_string(raw)
    if tagged is None:
        return None
    try:
        return tagged.to_date()
    except ValueError as e:
        # Date(2025,1,30) and similar out-of-range components
        logger.warning("Invalid date %r: %s", raw, e)
        return None


def as_date(value: str | date | None) -> date | None:
    """Accept either a raw cell string or an already parsed date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_record_date(value)


def same_day(a: date | None, b: date | None) -> bool:
    """Compare by (year, month, day) only."""
    if a is None or b is None:
        return False
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def format_display_date(raw: str | None, default: str = "") -> str:
    """
    Format a cell date as D/M/YYYY for humans.

    Legacy values get the zero-based month shifted by one here and only here.
    Values that cannot be parsed are returned unchanged. They were already
    reported when the record was loaded, so nothing is logged here.
    """
    if not raw:
        return default
    tagged = classify_date_string(raw, warn=False)
    if tagged is None:
        return raw
    return tagged.display()


def format_date_display(d: date) -> str:
    """Format a date as D/M/YYYY (no zero-padding)."""
    return f"{d.day}/{d.month}/{d.year}"
