"""Campaign lookup endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from api.dependencies import get_store
from api.models.responses import (
    CampaignsResponse,
    CampaignSummaryOut,
    RankedOut,
    RecordOut,
    StatusCountsOut,
)
from services.campaigns import (
    aggregate_by_campaign,
    filter_options,
    lookup_stats,
    search_records,
    top_developers_and_campaigns,
)
from services.colors import campaign_color
from services.reports import records_to_csv
from services.store import RecordStore

router = APIRouter(prefix="/v1")


@router.get("/campaigns", response_model=CampaignsResponse)
async def campaigns(
    q: str | None = Query(None, description="Case-insensitive search over every field"),
    store: RecordStore = Depends(get_store),
):
    """Global statistics, per-campaign summaries and record search."""
    snapshot = store.snapshot
    records = snapshot.records
    stats = lookup_stats(records)
    top_developers, top_campaigns = top_developers_and_campaigns(records)
    options = filter_options(records)
    results = search_records(records, q)

    return CampaignsResponse(
        has_data=snapshot.has_data,
        data_error=store.last_error,
        total=stats.total,
        campaign_count=stats.campaigns,
        developer_count=stats.developers,
        client_count=stats.clients,
        statuses=StatusCountsOut.from_counts(stats.statuses),
        top_developers=[RankedOut(name=name, count=count) for name, count in top_developers],
        top_campaigns=[RankedOut(name=name, count=count) for name, count in top_campaigns],
        campaigns=[
            CampaignSummaryOut(
                campaign=summary.campaign,
                color=campaign_color(summary.campaign),
                total=summary.total,
                statuses=StatusCountsOut.from_counts(summary.statuses),
                developers=sorted(summary.developers),
                coordinators=sorted(summary.coordinators),
                applications=sorted(summary.applications),
                clients=sorted(summary.clients),
            )
            for summary in aggregate_by_campaign(records)
        ],
        status_options=options["statuses"],
        campaign_options=options["campaigns"],
        query=q,
        result_count=len(results),
        results=[RecordOut.from_record(r) for r in results],
    )


@router.get("/campaigns/export")
async def export_campaigns(
    q: str | None = Query(None, description="Same search as the lookup view"),
    store: RecordStore = Depends(get_store),
):
    """Download the records matching the lookup search as plain CSV (no banner)."""
    results = search_records(store.snapshot.records, q)
    filename = f"training_data_{datetime.now(timezone.utc).date().isoformat()}.csv"

    return Response(
        content=records_to_csv(results).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
