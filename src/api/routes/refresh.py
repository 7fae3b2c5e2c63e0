"""Manual refresh endpoint."""

from fastapi import APIRouter, Depends

from api.dependencies import get_store
from api.models.responses import RefreshResponse
from services.store import RecordStore

router = APIRouter(prefix="/v1")


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(store: RecordStore = Depends(get_store)):
    """
    Reload the feed now.

    `refreshed` is false when another reload was already running or the
    feed failed; in both cases the current data stays in place.
    """
    refreshed = await store.refresh()
    snapshot = store.snapshot
    return RefreshResponse(
        refreshed=refreshed,
        record_count=len(snapshot.records),
        loaded_at=snapshot.loaded_at.isoformat() if snapshot.loaded_at else None,
        error=store.last_error,
    )
