"""Process environment for CampusConnect.

Import this module before anything that reads environment variables: it loads
the optional ``.env`` file through python-dotenv and decides whether the
service runs in development (SQLite, open CORS, API docs enabled) or
production (``DATABASE_URL``, restricted CORS, no docs).

Usage:
    from campusconnect.config.environment import IS_PRODUCTION_ENVIRONMENT
"""

import os
import logging
from dotenv import load_dotenv

# Must run before the other config modules read os.environ
load_dotenv()

VALID_ENVIRONMENTS = ('development', 'production')

ENVIRONMENT_NAME = os.environ.get('ENVIRONMENT', '').strip().lower()

if ENVIRONMENT_NAME not in VALID_ENVIRONMENTS:
    logging.warning(
        f"ENVIRONMENT '{ENVIRONMENT_NAME}' is not one of {VALID_ENVIRONMENTS}; "
        "running as development."
    )
    ENVIRONMENT_NAME = 'development'

IS_PRODUCTION_ENVIRONMENT = ENVIRONMENT_NAME == 'production'

__all__ = ['ENVIRONMENT_NAME', 'IS_PRODUCTION_ENVIRONMENT']
