import pytest

from campusconnect.config import AppSettings, verify_admin_auth
from campusconnect.notifications import WELCOME_ID

from .conftest import ADMIN_KEY, NOW, make_event

pytestmark = pytest.mark.asyncio


async def test_feed_is_reused_until_catalog_changes(services, store):
    feed = await services.notification_feed('u1', NOW)
    feed.mark_as_read(WELCOME_ID)

    assert (await services.notification_feed('u1', NOW)) is feed
    assert feed.unread_count == 0

    store._events.append(make_event('new'))
    store._touch()
    feed = await services.notification_feed('u1', NOW)
    assert feed.unread_count == 1


async def test_forget_user_drops_feed(services):
    feed = await services.notification_feed('u1', NOW)
    services.forget_user('u1')
    assert (await services.notification_feed('u1', NOW)) is not feed


async def test_registration_counts_default_to_zero_on_failure(services, store, durable_store, attendee):
    store._events.extend([make_event('a'), make_event('b')])
    await durable_store.insert_registration('u1', 'a', attendee)

    assert [(e.id, n) for e, n in await services.registration_counts()] == [('a', 1), ('b', 0)]

    durable_store.fail = True
    assert [(e.id, n) for e, n in await services.registration_counts()] == [('a', 0), ('b', 0)]


async def test_close_closes_registration_store(services, durable_store):
    services.close()
    assert durable_store.closed


async def test_settings_reject_unknown_backend():
    with pytest.raises(ValueError):
        AppSettings(registration_store='mongo')


async def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv('CAMPUS_TIMEZONE', 'Europe/Oslo')
    monkeypatch.setenv('REMINDER_WINDOW_DAYS', '5')
    monkeypatch.setenv('REGISTRATION_STORE', 'Supabase')
    monkeypatch.setenv('SEED_SAMPLE_DATA', 'false')

    settings = AppSettings()
    assert settings.timezone == 'Europe/Oslo'
    assert settings.reminder_window.days == 5
    assert settings.registration_store == 'supabase'
    assert settings.seed_sample_data is False


async def test_admin_auth(settings):
    assert verify_admin_auth(ADMIN_KEY, settings)
    assert not verify_admin_auth('wrong', settings)
    assert not verify_admin_auth(None, settings)
    settings.admin_api_key = ''
    assert not verify_admin_auth('', settings)


async def test_feeds_are_bounded_least_recently_used_first(services):
    services.max_feeds = 2
    first = await services.notification_feed('u1', NOW)
    await services.notification_feed('u2', NOW)
    assert (await services.notification_feed('u1', NOW)) is first

    await services.notification_feed('u3', NOW)
    assert set(services._feeds) == {'u1', 'u3'}


async def test_zero_day_reminder_window_is_kept(monkeypatch):
    monkeypatch.setenv('REMINDER_WINDOW_DAYS', '7')
    settings = AppSettings(reminder_window_days=0, registration_store='sql')
    assert settings.reminder_window_days == 0
    assert settings.reminder_window.days == 0
