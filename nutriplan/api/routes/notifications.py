from typing import Optional

from fastapi import APIRouter, Query

from nutriplan.events.web_observers import get_events

router = APIRouter(prefix="/api", tags=["notifications"])


@router.get("/notifications")
def notifications(since: Optional[int] = Query(default=None)):
    """Transient notifications newer than `since` plus the cursor for the next poll."""
    return get_events(since)
