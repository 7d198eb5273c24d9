"""Health check routes for the FastAPI application."""

from fastapi import APIRouter, Depends

from ... import __version__
from ...config.environment import ENVIRONMENT_NAME
from ...services import CampusServices
from ..dependencies import get_services

router = APIRouter(tags=["health"])


@router.get("/")
async def health_check(services: CampusServices = Depends(get_services)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": ENVIRONMENT_NAME,
        "version": __version__,
        "registrationStore": services.registration_store.name,
        "events": len(services.store.list_events()),
    }
