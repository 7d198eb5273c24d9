"""Relational durable registration store (SQLAlchemy)."""

import asyncio
import logging
from typing import List

from sqlalchemy import func, select

from ..db import Database, DatabaseError, with_retry
from ..errors import RemoteFailure
from ..models import AttendeeInfo, RegistrationRecord
from .base import DurableRegistrationStore

logger = logging.getLogger(__name__)


class SqlRegistrationStore(DurableRegistrationStore):
    """
    Registrations stored in the ``event_registrations`` table.

    Blocking SQLAlchemy work runs in a worker thread so the event loop is
    never held. Reads are retried on transient errors; inserts are not, since
    a retried insert could record the registration twice.
    """

    name = "sql"

    def __init__(self, database: Database):
        self.db = database

    def _insert(self, user_id: str, event_id: str, attendee_info: AttendeeInfo) -> None:
        with self.db.session() as session:
            session.add(RegistrationRecord(
                user_id=user_id,
                event_id=event_id,
                attendee_info=attendee_info.to_dict(),
            ))

    @with_retry()
    def _event_ids_for_user(self, user_id: str) -> List[str]:
        with self.db.session() as session:
            rows = session.execute(
                select(RegistrationRecord.event_id)
                .where(RegistrationRecord.user_id == user_id)
                .order_by(RegistrationRecord.id)
            )
            return [event_id for (event_id,) in rows]

    @with_retry()
    def _count_for_event(self, event_id: str) -> int:
        with self.db.session() as session:
            return session.execute(
                select(func.count(RegistrationRecord.id))
                .where(RegistrationRecord.event_id == event_id)
            ).scalar_one()

    async def insert_registration(self, user_id: str, event_id: str, attendee_info: AttendeeInfo) -> None:
        try:
            await asyncio.to_thread(self._insert, user_id, event_id, attendee_info)
        except DatabaseError as e:
            logger.error(f"Failed to store registration of {user_id} for event {event_id}: {e}")
            raise RemoteFailure(f"Registration insert failed: {e}") from e

    async def list_registrations_for_user(self, user_id: str) -> List[str]:
        try:
            return await asyncio.to_thread(self._event_ids_for_user, user_id)
        except DatabaseError as e:
            logger.error(f"Failed to list registrations of {user_id}: {e}")
            raise RemoteFailure(f"Registration lookup failed: {e}") from e

    async def count_registrations_for_event(self, event_id: str) -> int:
        try:
            return await asyncio.to_thread(self._count_for_event, event_id)
        except DatabaseError as e:
            logger.error(f"Failed to count registrations for event {event_id}: {e}")
            raise RemoteFailure(f"Registration count failed: {e}") from e

    def close(self) -> None:
        self.db.dispose()
