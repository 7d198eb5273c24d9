"""Durable registration store backends."""

import logging
from typing import Optional

from ..config.external_services import get_supabase_config
from ..db import Database, DatabaseConfig
from .base import DurableRegistrationStore
from .sql_store import SqlRegistrationStore
from .supabase_store import SupabaseRegistrationStore

logger = logging.getLogger(__name__)


def create_registration_store(backend: str, database: Optional[Database] = None) -> DurableRegistrationStore:
    """
    Build the durable store named by ``backend`` ('sql' or 'supabase').

    Raises:
        ValueError: If the backend is unknown or its configuration is incomplete
    """
    if backend == 'sql':
        store = SqlRegistrationStore(database or Database(DatabaseConfig()))
    elif backend == 'supabase':
        store = SupabaseRegistrationStore(get_supabase_config())
    else:
        raise ValueError(f"Unknown registration store backend: {backend}")
    logger.info(f"Using {store.name} registration store")
    return store


__all__ = [
    'DurableRegistrationStore',
    'SqlRegistrationStore',
    'SupabaseRegistrationStore',
    'create_registration_store',
]
