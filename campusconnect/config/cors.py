"""CORS configuration for the FastAPI application."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT

# Production origins come from the deployment, comma separated
_production_origins = [
    origin.strip()
    for origin in os.environ.get('CORS_ALLOWED_ORIGINS', '').split(',')
    if origin.strip()
]

# CORS Origins configuration
ALLOWED_ORIGINS = {
    False: ["*"],  # Development - allow all
    True: _production_origins,
}

# CORS Methods configuration
ALLOWED_METHODS = [
    "GET",      # Catalog, notifications, dashboard
    "POST",     # Registrations and admin creation
    "PATCH",    # Admin event updates
    "DELETE",   # Admin event removal
    "OPTIONS"   # Required for CORS preflight
]

# CORS Headers configuration
ALLOWED_HEADERS = [
    "Authorization",  # For admin endpoints
    "X-User-Id",      # Identity supplied by the auth provider
    "Content-Type",   # For request bodies
    "Accept",         # For content negotiation
]

CORS_CONFIG = {
    "allow_origins": ALLOWED_ORIGINS[IS_PRODUCTION_ENVIRONMENT],
    "allow_credentials": True,
    "allow_methods": ALLOWED_METHODS,
    "allow_headers": ALLOWED_HEADERS,
    "expose_headers": [],
    "max_age": 3600,
}
