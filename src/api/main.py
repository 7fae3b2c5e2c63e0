"""FastAPI application entry point."""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.logging import RequestLog, get_client_ip, log_request
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import (
    calendar_router,
    campaigns_router,
    health_router,
    refresh_router,
    reports_router,
)
from core.config import API_DEBUG, API_VERSION, REFRESH_INTERVAL_SECONDS
from core.log import setup_logging
from core.sheets import get_sheet_client
from services.records import FeedLoader
from services.store import PeriodicRefresher, RecordStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    setup_logging()

    # Startup: first tick loads the feed, then every REFRESH_INTERVAL_SECONDS
    store = RecordStore(FeedLoader(get_sheet_client()))
    refresher = PeriodicRefresher(store, interval=REFRESH_INTERVAL_SECONDS)
    app.state.store = store
    refresher.start()

    yield

    # Shutdown: stop the ticker
    await refresher.stop()


app = FastAPI(
    title="Training Dashboard API",
    description="Calendar, campaign lookup and period reports over the training sheets",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# The browser dashboard is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    start_time = time.time()
    request_log = RequestLog(
        endpoint=request.url.path,
        method=request.method,
        query=request.url.query,
        client_ip=get_client_ip(request),
    )
    try:
        response = await call_next(request)
        request_log.status_code = response.status_code
        return response
    except Exception as e:
        request_log.status_code = 500
        request_log.error_message = str(e)
        raise
    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        log_request(request_log)


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(calendar_router)
app.include_router(campaigns_router)
app.include_router(reports_router)
app.include_router(refresh_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
