"""Events router: catalog queries, eligibility and registration."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...eligibility import ensure_eligible
from ...models import CATEGORY_LABELS, EventCategory
from ...query import EventView, SortKey
from ...services import CampusServices
from ..dependencies import get_services, get_user_id
from ..schemas import AttendeeInfoBody

router = APIRouter(tags=["events"])


@router.get("/events", response_model=List[Dict])
async def list_events(
    view: EventView = EventView.ALL,
    q: Optional[str] = None,
    category: List[EventCategory] = Query(default=[]),
    sort: Optional[SortKey] = None,
    services: CampusServices = Depends(get_services),
):
    """List events of a view, optionally searched, filtered by category and sorted."""
    # A blank search box shows the view unfiltered
    search = q if q and q.strip() else None
    events = services.queries.query(view=view, search=search, categories=category, sort=sort)
    return [event.to_dict() for event in events]


@router.get("/events/categories", response_model=List[Dict])
async def list_categories():
    """Categories with their display labels."""
    return [{"value": category.value, "label": CATEGORY_LABELS[category]} for category in EventCategory]


@router.get("/events/{event_id}", response_model=Dict)
async def get_event(
    event_id: str,
    user_id: Optional[str] = Depends(get_user_id),
    services: CampusServices = Depends(get_services),
):
    """Get a single event with the caller's registration state."""
    event = services.store.require_event(event_id)
    return {
        **event.to_dict(),
        "registered": bool(user_id) and services.store.is_user_registered(user_id, event_id),
        "eligibility": services.eligibility.to_dict(event, user_id),
    }


@router.get("/events/{event_id}/eligibility", response_model=Dict)
async def get_eligibility(
    event_id: str,
    user_id: Optional[str] = Depends(get_user_id),
    services: CampusServices = Depends(get_services),
):
    event = services.store.require_event(event_id)
    return services.eligibility.to_dict(event, user_id)


@router.post("/events/{event_id}/registrations", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def register_for_event(
    event_id: str,
    body: AttendeeInfoBody,
    user_id: Optional[str] = Depends(get_user_id),
    services: CampusServices = Depends(get_services),
):
    """Register the caller; fails with the eligibility reason when not allowed."""
    event = services.store.require_event(event_id)
    ensure_eligible(services.eligibility.evaluate(event, user_id))
    registration = await services.registrations.register(event_id, user_id, body.to_attendee_info())
    return registration.to_dict()
