"""Registrations router: the caller's own registrations."""

from typing import Dict

from fastapi import APIRouter, Depends

from ...services import CampusServices
from ...utils.timezone import now_utc
from ..dependencies import get_services, require_user_id

router = APIRouter(tags=["registrations"])


@router.get("/registrations/me", response_model=Dict)
async def my_registrations(
    user_id: str = Depends(require_user_id),
    services: CampusServices = Depends(get_services),
):
    """Registered events of the caller split into upcoming and past, by event date."""
    now = now_utc()
    upcoming, past = [], []
    for registration in services.store.registrations_for_user(user_id):
        event = services.store.get_event(registration.event_id)
        if event is None:
            continue
        (upcoming if event.date > now else past).append((event, registration))

    # Compare instants, not ISO strings: offsets differ between events
    upcoming.sort(key=lambda pair: pair[0].date)
    past.sort(key=lambda pair: pair[0].date, reverse=True)
    return {
        "upcoming": [{**registration.to_dict(), "event": event.to_dict()} for event, registration in upcoming],
        "past": [{**registration.to_dict(), "event": event.to_dict()} for event, registration in past],
    }
