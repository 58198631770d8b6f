"""Notification API routes."""

from fastapi import APIRouter, Depends, Query

from herbtrace.dependencies import LedgerServices, get_services
from herbtrace.schemas.events import LedgerEventOut, LedgerEventsResponse

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000

router = APIRouter(prefix="/api", tags=["events"])


@router.get("/events", response_model=LedgerEventsResponse)
async def list_events(
    name: str | None = Query(None, description="Filter by event name, e.g. ZoneRegistered"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Max events to return"),
    services: LedgerServices = Depends(get_services),
) -> LedgerEventsResponse:
    """Most recent notifications, oldest first."""
    events = services.events.history()
    if name:
        events = [e for e in events if e.name == name]

    limited_events = events[-limit:]

    return LedgerEventsResponse(
        events=[
            LedgerEventOut(name=e.name, emitted_at=e.emitted_at, payload=e.payload())
            for e in limited_events
        ],
        total_count=len(events),
    )
