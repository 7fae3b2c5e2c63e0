"""API route modules."""

from .calendar import router as calendar_router
from .campaigns import router as campaigns_router
from .health import router as health_router
from .refresh import router as refresh_router
from .reports import router as reports_router

__all__ = [
    "health_router",
    "calendar_router",
    "campaigns_router",
    "reports_router",
    "refresh_router",
]
