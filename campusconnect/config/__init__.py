"""Configuration package.

``environment`` is imported first so the .env file is loaded before any
setting is read.
"""

from .environment import ENVIRONMENT_NAME, IS_PRODUCTION_ENVIRONMENT
from .settings import AppSettings, verify_admin_auth

__all__ = [
    'ENVIRONMENT_NAME',
    'IS_PRODUCTION_ENVIRONMENT',
    'AppSettings',
    'verify_admin_auth',
]
