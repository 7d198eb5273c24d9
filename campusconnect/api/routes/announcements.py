"""Announcements router."""

from typing import Dict, List

from fastapi import APIRouter, Depends

from ...services import CampusServices
from ..dependencies import get_services

router = APIRouter(tags=["announcements"])


@router.get("/announcements", response_model=List[Dict])
async def list_announcements(services: CampusServices = Depends(get_services)):
    """Get all announcements, newest first."""
    return [announcement.to_dict() for announcement in services.store.list_announcements()]
