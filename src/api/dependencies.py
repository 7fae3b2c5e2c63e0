"""FastAPI dependencies for shared resources."""

from fastapi import Request

from services.store import RecordStore


def get_store(request: Request) -> RecordStore:
    """Record store created by the application lifespan."""
    return request.app.state.store
