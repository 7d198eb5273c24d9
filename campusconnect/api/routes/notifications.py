"""Notifications router.

Read flags are kept per user on the server-side feed until the catalog
changes and the feed is rebuilt.
"""

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Response

from ...services import CampusServices
from ..dependencies import get_services, require_user_id

router = APIRouter(tags=["notifications"])


@router.get("/notifications", response_model=Dict)
async def get_notifications(
    user_id: str = Depends(require_user_id),
    services: CampusServices = Depends(get_services),
):
    feed = await services.notification_feed(user_id)
    return feed.to_dict()


@router.post("/notifications/read-all", response_model=Dict)
async def mark_all_as_read(
    user_id: str = Depends(require_user_id),
    services: CampusServices = Depends(get_services),
):
    feed = await services.notification_feed(user_id)
    feed.mark_all_as_read()
    return feed.to_dict()


@router.post("/notifications/{notification_id}/read", response_model=Dict)
async def mark_as_read(
    notification_id: str,
    user_id: str = Depends(require_user_id),
    services: CampusServices = Depends(get_services),
):
    """Mark a single notification as read."""
    feed = await services.notification_feed(user_id)
    if not feed.mark_as_read(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return feed.to_dict()


@router.delete("/notifications", status_code=204)
async def clear_notifications(
    user_id: str = Depends(require_user_id),
    services: CampusServices = Depends(get_services),
):
    """Drop the caller's feed (on logout); read state is lost."""
    services.forget_user(user_id)
    return Response(status_code=204)
