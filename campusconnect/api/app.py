"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Environment must be imported first so .env is loaded
from ..config.environment import IS_PRODUCTION_ENVIRONMENT
from ..config import AppSettings
from ..config.cors import CORS_CONFIG
from ..eligibility import EligibilityOutcome
from ..errors import IneligibleError, NotFoundError, RemoteFailure, ValidationError
from ..persistence import SqlRegistrationStore
from ..services import CampusServices, build_services
from ..utils.logging_config import setup_logging
from .. import __version__
from .routes import (
    admin,
    announcements,
    dashboard,
    events,
    health,
    notifications,
    registrations
)

# Set up logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    try:
        if app.state.services is None:
            app.state.services = build_services(app.state.settings)
        services: CampusServices = app.state.services
        if isinstance(services.registration_store, SqlRegistrationStore):
            services.registration_store.db.ensure_tables_exist()
        logger.info(f"CampusConnect started with settings {services.settings.to_dict()}")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise
    yield
    # Shutdown
    app.state.services.close()


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    """Map the engine's errors to HTTP responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(IneligibleError)
    async def ineligible_handler(request: Request, exc: IneligibleError):
        if exc.outcome == EligibilityOutcome.NOT_AUTHENTICATED:
            status_code = status.HTTP_401_UNAUTHORIZED
        else:
            status_code = status.HTTP_409_CONFLICT
        return _error_response(status_code, str(exc), reason=EligibilityOutcome(exc.outcome).value)

    @app.exception_handler(RemoteFailure)
    async def remote_failure_handler(request: Request, exc: RemoteFailure):
        logger.error(f"Registration store failure on {request.url.path}: {exc}")
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc.user_message)


def create_application(
    services: Optional[CampusServices] = None,
    settings: Optional[AppSettings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        services: Prebuilt services (tests); built from ``settings`` at startup otherwise
        settings: Settings used when the services are built at startup
    """
    app = FastAPI(
        title="CampusConnect API",
        description="Campus events: browsing, registration and notifications",
        version=__version__,
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )
    app.state.services = services
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)
    register_exception_handlers(app)

    # Include health check router without prefix
    app.include_router(health.router)

    # Include routers with prefix
    app.include_router(events.router, prefix="/api")
    app.include_router(registrations.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")
    app.include_router(notifications.router, prefix="/api")
    app.include_router(announcements.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")

    return app


# Create the application instance
app = create_application()
