"""Dashboard router."""

from typing import Dict, Optional

from fastapi import APIRouter, Depends

from ...query import SortKey, sort_events
from ...services import CampusServices
from ...utils.timezone import now_utc
from ..dependencies import get_services, get_user_id

router = APIRouter(tags=["dashboard"])

UPCOMING_PREVIEW_SIZE = 3


@router.get("/dashboard", response_model=Dict)
async def dashboard(
    user_id: Optional[str] = Depends(get_user_id),
    services: CampusServices = Depends(get_services),
):
    """
    Landing page summary: the next upcoming events and, for a logged in
    caller, their registered events and unread notification count.
    """
    now = now_utc()
    upcoming = sort_events(services.queries.list_upcoming(now), SortKey.DATE_ASC)

    registered = []
    unread = 0
    if user_id:
        events = [services.store.get_event(r.event_id) for r in services.store.registrations_for_user(user_id)]
        registered = sort_events([event for event in events if event is not None], SortKey.DATE_ASC)
        feed = await services.notification_feed(user_id, now)
        unread = feed.unread_count

    return {
        "upcomingEvents": [event.to_dict() for event in upcoming[:UPCOMING_PREVIEW_SIZE]],
        "registeredEvents": [event.to_dict() for event in registered],
        "registrationCount": len(registered),
        "unreadNotifications": unread,
    }
