"""Period report endpoints."""

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from api.dependencies import get_store
from api.models.responses import (
    ErrorCodes,
    PeriodOut,
    RankedOut,
    RecordOut,
    ReportResponse,
    StatusCountsOut,
)
from services.reports import (
    PeriodKind,
    PeriodReport,
    RankedEntry,
    build_period_report,
    create_period_excel_report,
    export_filename,
    records_to_csv,
)
from services.store import RecordStore

router = APIRouter(prefix="/v1")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _build_report(store: RecordStore, kind: PeriodKind, year: int | None, index: int | None) -> PeriodReport:
    """Build the report or raise a 422 for an invalid period index."""
    try:
        return build_period_report(store.snapshot.records, kind, year or date.today().year, index)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Invalid report period",
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": [str(e)],
            },
        )


def _ranked_out(entries: list[RankedEntry]) -> list[RankedOut]:
    return [RankedOut(name=e.name, count=e.count, related=e.related) for e in entries]


@router.get("/reports/{kind}", response_model=ReportResponse)
async def period_report(
    kind: PeriodKind,
    year: int | None = Query(None, ge=1, le=9999),
    index: int | None = Query(None, description="Month, bimonth, quarter or half (1-based)"),
    store: RecordStore = Depends(get_store),
):
    """Summary of the records overlapping a monthly/bimonthly/.../annual period."""
    report = _build_report(store, kind, year, index)
    period = report.period

    return ReportResponse(
        has_data=store.snapshot.has_data,
        data_error=store.last_error,
        period=PeriodOut(
            kind=period.kind.value,
            year=period.year,
            index=period.index,
            start=period.start,
            end=period.end,
            label=period.label,
        ),
        total=report.total,
        statuses=StatusCountsOut.from_counts(report.statuses),
        campaign_count=report.campaign_count,
        developer_count=report.developer_count,
        top_campaigns=_ranked_out(report.top_campaigns),
        top_developers=_ranked_out(report.top_developers),
        clients=_ranked_out(report.clients),
        records=[RecordOut.from_record(r) for r in report.records],
    )


@router.get("/reports/{kind}/export")
async def export_period_report(
    kind: PeriodKind,
    year: int | None = Query(None, ge=1, le=9999),
    index: int | None = Query(None),
    export_format: Literal["csv", "xlsx"] = Query("csv", alias="format"),
    store: RecordStore = Depends(get_store),
):
    """Download the period's records as CSV or as an Excel workbook."""
    report = _build_report(store, kind, year, index)
    filename = export_filename(report.period, export_format)
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}

    if export_format == "xlsx":
        return Response(
            content=create_period_excel_report(report),
            media_type=XLSX_MEDIA_TYPE,
            headers=headers,
        )

    return Response(
        content=records_to_csv(report.records, title=report.period.label).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers=headers,
    )
