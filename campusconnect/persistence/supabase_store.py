"""Durable registration store backed by a hosted Supabase table."""

import asyncio
import logging
from typing import List, Optional

import requests

from ..config.external_services import SupabaseConfig
from ..errors import RemoteFailure
from ..models import AttendeeInfo
from .base import DurableRegistrationStore

logger = logging.getLogger(__name__)


class SupabaseRegistrationStore(DurableRegistrationStore):
    """
    Client for the ``event_registrations`` table over Supabase's PostgREST API.

    ``requests`` is blocking, so every call runs in a worker thread. Timeouts
    are the configured ``SUPABASE_TIMEOUT``; any transport error, timeout or
    non-2xx answer becomes RemoteFailure.
    """

    name = "supabase"

    def __init__(self, config: SupabaseConfig, session: Optional[requests.Session] = None):
        config.validate()
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(config.headers())

    def _insert(self, user_id: str, event_id: str, attendee_info: AttendeeInfo) -> None:
        response = self.session.post(
            self.config.rest_url,
            json={
                'user_id': user_id,
                'event_id': event_id,
                'attendee_info': attendee_info.to_dict(),
            },
            headers={'Prefer': 'return=minimal'},
            timeout=self.config.timeout,
        )
        response.raise_for_status()

    def _event_ids_for_user(self, user_id: str) -> List[str]:
        response = self.session.get(
            self.config.rest_url,
            params={'select': 'event_id', 'user_id': f'eq.{user_id}'},
            timeout=self.config.timeout,
        )
        response.raise_for_status()

        rows = response.json()
        if not isinstance(rows, list):
            raise ValueError("Supabase response must be a list of registrations")
        event_ids = []
        for row in rows:
            if not isinstance(row, dict):
                raise ValueError(f"Unexpected registration row: {row!r}")
            if row.get('event_id') is not None:
                event_ids.append(str(row['event_id']))
        return event_ids

    def _count_for_event(self, event_id: str) -> int:
        response = self.session.head(
            self.config.rest_url,
            params={'select': 'id', 'event_id': f'eq.{event_id}'},
            headers={'Prefer': 'count=exact'},
            timeout=self.config.timeout,
        )
        response.raise_for_status()

        # PostgREST reports the total as "<range>/<count>", e.g. "0-24/25" or "*/0"
        content_range = response.headers.get('Content-Range', '')
        _, _, total = content_range.partition('/')
        if not total.isdigit():
            raise ValueError(f"Unexpected Content-Range header: {content_range!r}")
        return int(total)

    async def _call(self, description: str, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.error(f"Supabase {description} failed: {e}")
            raise RemoteFailure(f"Supabase {description} failed: {e}") from e

    async def insert_registration(self, user_id: str, event_id: str, attendee_info: AttendeeInfo) -> None:
        await self._call("insert", self._insert, user_id, event_id, attendee_info)

    async def list_registrations_for_user(self, user_id: str) -> List[str]:
        return await self._call("registration lookup", self._event_ids_for_user, user_id)

    async def count_registrations_for_event(self, event_id: str) -> int:
        return await self._call("registration count", self._count_for_event, event_id)

    def close(self) -> None:
        self.session.close()
