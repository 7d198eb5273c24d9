import asyncio

import pytest

from campusconnect.eligibility import EligibilityOutcome
from campusconnect.errors import GENERIC_RETRY_MESSAGE, IneligibleError, NotFoundError, RemoteFailure
from campusconnect.registration import RegistrationWriter

from .conftest import NOW, FakeRegistrationStore, make_event

pytestmark = pytest.mark.asyncio


@pytest.fixture
def writer(store, durable_store):
    return RegistrationWriter(store, durable_store)


async def test_register_counts_attendee_and_persists(writer, store, durable_store, attendee):
    store._events.append(make_event('e1', max_attendees=10, current_attendees=5))

    registration = await writer.register('e1', 'u1', attendee, NOW)

    assert store.get_event('e1').current_attendees == 6
    matching = [r for r in store.list_registrations() if (r.user_id, r.event_id) == ('u1', 'e1')]
    assert matching == [registration]
    assert registration.registration_date == NOW
    assert durable_store.rows == [('u1', 'e1', attendee)]


async def test_failed_persistence_is_rolled_back(writer, store, durable_store, attendee):
    store._events.append(make_event('e1', max_attendees=10, current_attendees=5))
    version = store.version
    durable_store.fail = True

    with pytest.raises(RemoteFailure) as exc_info:
        await writer.register('e1', 'u1', attendee, NOW)

    assert exc_info.value.user_message == GENERIC_RETRY_MESSAGE
    assert store.get_event('e1').current_attendees == 5
    assert store.list_registrations() == []
    assert not store.is_user_registered('u1', 'e1')
    assert store.version > version


async def test_unknown_event(writer, attendee):
    with pytest.raises(NotFoundError):
        await writer.register('missing', 'u1', attendee, NOW)


async def test_full_event_is_rejected_without_side_effects(writer, store, durable_store, attendee):
    store._events.append(make_event('e1', max_attendees=2, current_attendees=2))

    with pytest.raises(IneligibleError) as exc_info:
        await writer.register('e1', 'u1', attendee, NOW)

    assert exc_info.value.outcome is EligibilityOutcome.EVENT_FULL
    assert store.get_event('e1').current_attendees == 2
    assert durable_store.rows == []


async def test_unlimited_event_accepts_registrations(writer, store, attendee):
    store._events.append(make_event('e1'))
    await writer.register('e1', 'u1', attendee, NOW)
    await writer.register('e1', 'u2', attendee, NOW)
    assert store.get_event('e1').current_attendees == 2


class _CancelledStore(FakeRegistrationStore):
    async def insert_registration(self, user_id, event_id, attendee_info):
        raise asyncio.CancelledError()


class _BrokenStore(FakeRegistrationStore):
    async def insert_registration(self, user_id, event_id, attendee_info):
        raise RuntimeError("unexpected transport bug")


@pytest.mark.parametrize("durable, error", [(_CancelledStore, asyncio.CancelledError), (_BrokenStore, RuntimeError)])
async def test_any_interrupted_insert_is_rolled_back(store, attendee, durable, error):
    store._events.append(make_event('e1', max_attendees=10, current_attendees=5))
    writer = RegistrationWriter(store, durable())

    with pytest.raises(error):
        await writer.register('e1', 'u1', attendee, NOW)

    assert store.get_event('e1').current_attendees == 5
    assert store.list_registrations() == []
