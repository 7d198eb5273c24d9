"""Admin router module.

Every endpoint here is protected by the Authorization header.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status

from ...errors import NotFoundError
from ...services import CampusServices
from ..dependencies import get_services, verify_admin
from ..schemas import AnnouncementBody

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"], dependencies=[Depends(verify_admin)])


@router.get("/admin/events", response_model=List[Dict])
async def list_events_with_counts(services: CampusServices = Depends(get_services)):
    """Events with their durable registration counts (0 where a count failed)."""
    return [
        {**event.to_dict(), "registrationCount": count}
        for event, count in await services.registration_counts()
    ]


@router.post("/admin/events", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: Dict[str, Any] = Body(...),
    services: CampusServices = Depends(get_services),
):
    event = services.store.add_event(data)
    logger.info(f"Admin created event {event.id}: {event.title}")
    return event.to_dict()


@router.patch("/admin/events/{event_id}", response_model=Dict)
async def update_event(
    event_id: str,
    updates: Dict[str, Any] = Body(...),
    services: CampusServices = Depends(get_services),
):
    event = services.store.update_event(event_id, updates)
    if event is None:
        raise NotFoundError(f"Event {event_id} not found")
    logger.info(f"Admin updated event {event_id}")
    return event.to_dict()


@router.delete("/admin/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: str, services: CampusServices = Depends(get_services)):
    """Delete an event. Registrations that reference it are kept."""
    if not services.store.delete_event(event_id):
        raise NotFoundError(f"Event {event_id} not found")
    logger.info(f"Admin deleted event {event_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/admin/announcements", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    body: AnnouncementBody,
    services: CampusServices = Depends(get_services),
):
    announcement = services.store.add_announcement(body.model_dump())
    return announcement.to_dict()
