"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_store
from api.models.responses import HealthResponse
from core.config import API_VERSION
from services.store import RecordStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(store: RecordStore = Depends(get_store)):
    """
    Health check endpoint for monitoring.

    Returns 200 while the last refresh succeeded, 503 once it failed
    (previously loaded data is still served by the other endpoints).
    """
    snapshot = store.snapshot
    response = HealthResponse(
        status="degraded" if store.last_error else "healthy",
        version=API_VERSION,
        record_count=len(snapshot.records),
        last_refresh=snapshot.loaded_at.isoformat() if snapshot.loaded_at else None,
        refreshing=store.refreshing,
        timestamp=datetime.now(timezone.utc).isoformat(),
        error=store.last_error,
    )

    if store.last_error:
        return JSONResponse(status_code=503, content=response.model_dump())
    return response
