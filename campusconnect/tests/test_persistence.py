from unittest.mock import MagicMock

import pytest
import requests
from sqlalchemy.exc import OperationalError

from campusconnect.config.external_services import SupabaseConfig
from campusconnect.db import Database, DatabaseConfig, with_retry
from campusconnect.errors import RemoteFailure
from campusconnect.notifications import WELCOME_ID, NotificationDeriver
from campusconnect.persistence import SqlRegistrationStore, SupabaseRegistrationStore, create_registration_store

pytestmark = pytest.mark.asyncio


@pytest.fixture
def sql_store():
    store = SqlRegistrationStore(Database(DatabaseConfig(url='sqlite://')))
    yield store
    store.close()


async def test_sql_store_round_trip(sql_store, attendee):
    await sql_store.insert_registration('u1', 'e1', attendee)
    await sql_store.insert_registration('u1', 'e2', attendee)
    await sql_store.insert_registration('u2', 'e1', attendee)

    assert await sql_store.list_registrations_for_user('u1') == ['e1', 'e2']
    assert await sql_store.list_registrations_for_user('nobody') == []
    assert await sql_store.count_registrations_for_event('e1') == 2
    assert await sql_store.count_registrations_for_event('e3') == 0


async def test_sql_store_failure_is_remote_failure(sql_store, attendee):
    broken = MagicMock()
    broken.commit.side_effect = OperationalError('INSERT', {}, Exception('disk I/O error'))
    sql_store.db._session_factory = MagicMock(return_value=broken)

    with pytest.raises(RemoteFailure):
        await sql_store.insert_registration('u1', 'e1', attendee)


async def test_with_retry_retries_transient_errors():
    calls = []

    @with_retry(max_attempts=3, delay=0)
    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise OperationalError('SELECT 1', {}, Exception('locked'))
        return 'ok'

    assert flaky() == 'ok'
    assert len(calls) == 3


async def test_with_retry_does_not_retry_other_errors():
    calls = []

    @with_retry(max_attempts=3, delay=0)
    def broken():
        calls.append(1)
        raise ValueError('bad input')

    with pytest.raises(ValueError):
        broken()
    assert len(calls) == 1


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session, headers={})


@pytest.fixture
def supabase_store(session):
    config = SupabaseConfig(url='https://campus.supabase.co/', api_key='service-key', timeout=5)
    return SupabaseRegistrationStore(config, session=session)


async def test_supabase_insert(supabase_store, session, attendee):
    await supabase_store.insert_registration('u1', 'e1', attendee)

    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args[0] == 'https://campus.supabase.co/rest/v1/event_registrations'
    assert kwargs['json'] == {'user_id': 'u1', 'event_id': 'e1', 'attendee_info': attendee.to_dict()}
    assert kwargs['timeout'] == 5
    assert session.headers['apikey'] == 'service-key'


async def test_supabase_lists_event_ids(supabase_store, session):
    session.get.return_value.json.return_value = [{'event_id': '1'}, {'event_id': 3}]

    assert await supabase_store.list_registrations_for_user('u1') == ['1', '3']
    assert session.get.call_args.kwargs['params'] == {'select': 'event_id', 'user_id': 'eq.u1'}


async def test_supabase_counts_from_content_range(supabase_store, session):
    session.head.return_value.headers = {'Content-Range': '0-24/25'}
    assert await supabase_store.count_registrations_for_event('e1') == 25

    session.head.return_value.headers = {'Content-Range': '*/0'}
    assert await supabase_store.count_registrations_for_event('e1') == 0


@pytest.mark.parametrize("failure", [
    requests.ConnectionError('connection refused'),
    requests.Timeout('timed out'),
    requests.HTTPError('500 Server Error'),
])
async def test_supabase_transport_errors_become_remote_failure(supabase_store, session, attendee, failure):
    session.post.side_effect = failure
    with pytest.raises(RemoteFailure):
        await supabase_store.insert_registration('u1', 'e1', attendee)


async def test_supabase_malformed_response(supabase_store, session):
    session.get.return_value.json.return_value = {'error': 'unexpected'}
    with pytest.raises(RemoteFailure):
        await supabase_store.list_registrations_for_user('u1')


async def test_supabase_requires_configuration(monkeypatch):
    monkeypatch.delenv('SUPABASE_URL', raising=False)
    monkeypatch.delenv('SUPABASE_KEY', raising=False)
    with pytest.raises(ValueError):
        create_registration_store('supabase')


async def test_unknown_backend():
    with pytest.raises(ValueError):
        create_registration_store('mongo')


async def test_supabase_non_object_row_is_remote_failure(supabase_store, session):
    session.get.return_value.json.return_value = ['not-a-row']
    with pytest.raises(RemoteFailure):
        await supabase_store.list_registrations_for_user('u1')


async def test_malformed_supabase_rows_only_drop_confirmations(supabase_store, session, store):
    session.get.return_value.json.return_value = ['not-a-row']
    deriver = NotificationDeriver(store, supabase_store)
    notifications = await deriver.derive('u1')
    assert [n.id for n in notifications] == [WELCOME_ID]
