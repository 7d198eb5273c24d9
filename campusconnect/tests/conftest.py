"""Shared fixtures for the CampusConnect tests."""

from datetime import datetime, timezone
from typing import List, Tuple

import pytest

from campusconnect.catalog import CatalogStore
from campusconnect.config import AppSettings
from campusconnect.errors import RemoteFailure
from campusconnect.models import AttendeeInfo, Event, EventCategory
from campusconnect.persistence import DurableRegistrationStore
from campusconnect.services import CampusServices
from campusconnect.utils.timezone import get_campus_timezone

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)
UTC = get_campus_timezone('UTC')
ADMIN_KEY = 'test-admin-key'


class FakeRegistrationStore(DurableRegistrationStore):
    """In-memory durable store; set ``fail`` to make every call raise RemoteFailure."""

    name = "fake"

    def __init__(self):
        self.rows: List[Tuple[str, str, AttendeeInfo]] = []
        self.fail = False
        self.closed = False

    def _check(self):
        if self.fail:
            raise RemoteFailure("fake store unavailable")

    async def insert_registration(self, user_id, event_id, attendee_info):
        self._check()
        self.rows.append((user_id, event_id, attendee_info))

    async def list_registrations_for_user(self, user_id):
        self._check()
        return [event_id for row_user, event_id, _ in self.rows if row_user == user_id]

    async def count_registrations_for_event(self, event_id):
        self._check()
        return sum(1 for _, row_event, _ in self.rows if row_event == event_id)

    def close(self):
        self.closed = True


def make_event(event_id='e1', **overrides) -> Event:
    values = dict(
        id=event_id,
        title=f'Event {event_id}',
        description='An event used in tests',
        date=NOW,
        location='Main Hall',
        category=EventCategory.WORKSHOP,
        organizer='Test Club',
    )
    values.update(overrides)
    return Event(**values)


@pytest.fixture
def attendee():
    return AttendeeInfo(name='Ada Lovelace', email='ada@campus.edu', student_id='S12345')


@pytest.fixture
def store():
    return CatalogStore(tz=UTC)


@pytest.fixture
def durable_store():
    return FakeRegistrationStore()


@pytest.fixture
def settings():
    return AppSettings(
        timezone='UTC',
        reminder_window_days=3,
        registration_store='sql',
        admin_api_key=ADMIN_KEY,
        seed_sample_data=False,
    )


@pytest.fixture
def services(store, durable_store, settings):
    return CampusServices(store, durable_store, settings)
