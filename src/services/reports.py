"""
Period reports: date ranges, filtering, summaries and CSV/Excel export.
"""

import csv
import io
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import EXPORT_HEADERS, MONTH_NAMES, TOP_N_REPORT
from core.dates import format_date_display, format_display_date
from core.intervals import record_overlaps
from models.records import TrainingRecord
from services.calendar import month_bounds
from services.campaigns import StatusCounts, count_statuses, distinct_values, top_counts


# =============================================================================
# PERIODS
# =============================================================================


class PeriodKind(str, Enum):
    MONTHLY = "monthly"
    BIMONTHLY = "bimonthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"


# (months per period, number of periods in a year)
_PERIOD_SHAPE = {
    PeriodKind.MONTHLY: (1, 12),
    PeriodKind.BIMONTHLY: (2, 6),
    PeriodKind.QUARTERLY: (3, 4),
    PeriodKind.SEMIANNUAL: (6, 2),
    PeriodKind.ANNUAL: (12, 1),
}


@dataclass(frozen=True)
class ResolvedPeriod:
    kind: PeriodKind
    year: int
    index: int
    start: date
    end: date
    label: str


def _short_month(month: int) -> str:
    return MONTH_NAMES[month - 1][:3]


def _period_label(kind: PeriodKind, year: int, index: int, first_month: int, last_month: int) -> str:
    if kind is PeriodKind.MONTHLY:
        return f"{MONTH_NAMES[first_month - 1]} {year}"
    if kind is PeriodKind.BIMONTHLY:
        return f"{_short_month(first_month)} - {_short_month(last_month)} {year}"
    if kind is PeriodKind.QUARTERLY:
        return f"Q{index} {year}"
    if kind is PeriodKind.SEMIANNUAL:
        return f"{'Primer' if index == 1 else 'Segundo'} Semestre {year}"
    return f"Año {year}"


def resolve_period(kind: PeriodKind | str, year: int, index: int | None = None) -> ResolvedPeriod:
    """
    Resolve a period kind, year and index into a concrete date range.

    Index is the month (1-12), bimonth (1-6), quarter (1-4) or half (1-2);
    it defaults to 1 and is ignored for annual periods.

    Raises:
        ValueError: unknown kind or index out of range
    """
    kind = PeriodKind(kind)
    months, count = _PERIOD_SHAPE[kind]
    if kind is PeriodKind.ANNUAL:
        index = 1
    elif index is None:
        index = 1
    if not 1 <= index <= count:
        raise ValueError(f"{kind.value} period index must be between 1 and {count}, got {index}")

    first_month = (index - 1) * months + 1
    last_month = first_month + months - 1
    start, _ = month_bounds(year, first_month)
    _, end = month_bounds(year, last_month)

    return ResolvedPeriod(
        kind=kind,
        year=year,
        index=index,
        start=start,
        end=end,
        label=_period_label(kind, year, index, first_month, last_month),
    )


def filter_by_period(records: list[TrainingRecord], start: date, end: date) -> list[TrainingRecord]:
    """Records whose [start_date, end_date] overlaps [start, end]."""
    return [r for r in records if record_overlaps(r, start, end)]


# =============================================================================
# REPORT
# =============================================================================


@dataclass(frozen=True)
class RankedEntry:
    name: str
    count: int
    related: int  # distinct developers for a campaign, campaigns for a developer/client


@dataclass
class PeriodReport:
    period: ResolvedPeriod
    total: int
    statuses: StatusCounts
    campaign_count: int
    developer_count: int
    top_campaigns: list[RankedEntry] = field(default_factory=list)
    top_developers: list[RankedEntry] = field(default_factory=list)
    clients: list[RankedEntry] = field(default_factory=list)
    records: list[TrainingRecord] = field(default_factory=list)


def _ranked(
    records: list[TrainingRecord], key: str, related_key: str, n: int | None
) -> list[RankedEntry]:
    entries = []
    for name, count in top_counts(records, key, n):
        # A missing related value counts as one distinct entry
        related = {getattr(r, related_key) for r in records if getattr(r, key) == name}
        entries.append(RankedEntry(name, count, len(related)))
    return entries


def build_period_report(
    records: list[TrainingRecord],
    kind: PeriodKind | str,
    year: int,
    index: int | None = None,
    top_n: int = TOP_N_REPORT,
) -> PeriodReport:
    """Filter records to a period and summarize them."""
    period = resolve_period(kind, year, index)
    period_records = filter_by_period(records, period.start, period.end)

    return PeriodReport(
        period=period,
        total=len(period_records),
        statuses=count_statuses(period_records),
        campaign_count=len(distinct_values(period_records, "campaign")),
        developer_count=len(distinct_values(period_records, "developer")),
        top_campaigns=_ranked(period_records, "campaign", "developer", top_n),
        top_developers=_ranked(period_records, "developer", "campaign", top_n),
        clients=_ranked(period_records, "client", "campaign", None),
        records=period_records,
    )


# =============================================================================
# CSV EXPORT
# =============================================================================


def records_to_csv(
    records: list[TrainingRecord],
    title: str | None = None,
    generated_at: datetime | None = None,
) -> str:
    """
    Dump records as CSV with every value quoted.

    With a title, the dump starts with a report banner and a BOM so that
    spreadsheet apps pick up UTF-8.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

    if title:
        generated_at = generated_at or datetime.now()
        buffer.write("\ufeff")
        buffer.write(f"REPORTE {title.upper()},,,,\n")
        buffer.write(f"Generado el: {generated_at.strftime('%d/%m/%Y %H:%M')}\n")
        buffer.write("\n")

    buffer.write(",".join(header for header, _ in EXPORT_HEADERS) + "\n")
    for record in records:
        writer.writerow([getattr(record, attr) or "" for _, attr in EXPORT_HEADERS])

    return buffer.getvalue()


def export_filename(period: ResolvedPeriod, extension: str, today: date | None = None) -> str:
    today = today or date.today()
    return f"reporte_{period.kind.value}_{period.year}_{period.index}_{today.isoformat()}.{extension}"


# =============================================================================
# EXCEL EXPORT
# =============================================================================


def write_excel_summary_sheet(ws, report: PeriodReport):
    """
    Write the summary sheet: period header, totals and the ranked tables.
    """
    period = report.period
    ws.cell(row=1, column=1, value=f"Reporte {period.label}").font = Font(bold=True)
    ws.cell(
        row=2,
        column=1,
        value=f"{format_date_display(period.start)} - {format_date_display(period.end)}",
    )

    totals = [
        ("Total Registros", report.total),
        ("Completados", report.statuses.completed),
        ("En Curso", report.statuses.in_progress),
        ("Pendientes", report.statuses.pending),
        ("Campañas", report.campaign_count),
        ("Desarrolladores", report.developer_count),
    ]
    row = 4
    for label, value in totals:
        ws.cell(row=row, column=1, value=label)
        ws.cell(row=row, column=2, value=value)
        row += 1

    sections = [
        ("Top Campañas", "Desarrolladores", report.top_campaigns),
        ("Top Desarrolladores", "Campañas", report.top_developers),
        ("Resumen por Cliente", "Campañas", report.clients),
    ]
    for heading, related_label, entries in sections:
        row += 1
        for col_idx, header in enumerate([heading, "Procesos", related_label], start=1):
            ws.cell(row=row, column=col_idx, value=header).font = Font(bold=True)
        row += 1
        for entry in entries:
            ws.cell(row=row, column=1, value=entry.name)
            ws.cell(row=row, column=2, value=entry.count)
            ws.cell(row=row, column=3, value=entry.related)
            row += 1

    ws.column_dimensions["A"].width = 32


def write_excel_detail_sheet(ws, records: list[TrainingRecord]):
    """Write one row per record under bold headers. Dates use D/M/YYYY."""
    date_attrs = {"request_date", "material_date", "start_date", "end_date"}

    for col_idx, (header, _) in enumerate(EXPORT_HEADERS, start=1):
        ws.cell(row=1, column=col_idx, value=header).font = Font(bold=True)
        ws.column_dimensions[get_column_letter(col_idx)].width = max(12, len(header) + 2)

    for row_idx, record in enumerate(records, start=2):
        for col_idx, (_, attr) in enumerate(EXPORT_HEADERS, start=1):
            value = getattr(record, attr)
            if attr in date_attrs:
                value = format_display_date(value)
            ws.cell(row=row_idx, column=col_idx, value=value or "")


def create_period_excel_report(report: PeriodReport, output_path: Path | None = None) -> bytes:
    """
    Create the Excel period report (summary + detail sheets).

    Saves to output_path when given; always returns the workbook bytes.
    """
    wb = Workbook()

    ws_summary = wb.active
    ws_summary.title = "Resumen"
    write_excel_summary_sheet(ws_summary, report)

    ws_detail = wb.create_sheet(title="Detalle")
    write_excel_detail_sheet(ws_detail, report.records)

    buffer = io.BytesIO()
    wb.save(buffer)
    content = buffer.getvalue()

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(content)
    return content
