"""FastAPI dependencies: services, caller identity and admin authorization."""

from typing import Optional

from fastapi import Header, HTTPException, Request, status

from ..config import verify_admin_auth
from ..services import CampusServices


def get_services(request: Request) -> CampusServices:
    return request.app.state.services


async def get_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> Optional[str]:
    """Opaque user id supplied by the identity provider; None when logged out."""
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


async def require_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> str:
    user_id = await get_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please log in to continue."
        )
    return user_id


async def verify_admin(request: Request, authorization: Optional[str] = Header(None)) -> None:
    """
    Admin endpoints are protected by the Authorization header (ADMIN_API_KEY).
    """
    services = get_services(request)
    if not verify_admin_auth(authorization, services.settings):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization"
        )
