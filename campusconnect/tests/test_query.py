from datetime import timedelta

import pytest

from campusconnect.models import EventCategory
from campusconnect.query import EventView, QueryEngine, SortKey, filter_by_categories, sort_events
from campusconnect.utils.timezone import end_of_day, get_campus_timezone

from .conftest import NOW, UTC, make_event


@pytest.fixture
def catalog(store):
    events = [
        make_event('hack', title='Hackathon', date=NOW + timedelta(days=7),
                   category=EventCategory.HACKATHON, organizer='Computer Science Department',
                   current_attendees=42, is_featured=True),
        make_event('fair', title='career fair', date=NOW + timedelta(days=14),
                   category=EventCategory.FAIR, organizer='Career Services', current_attendees=123),
        make_event('ai', title='AI Workshop', date=NOW - timedelta(days=2), end_date=NOW + timedelta(days=5),
                   category=EventCategory.WORKSHOP, location='Virtual', current_attendees=98),
        make_event('old', title='Orientation', date=NOW - timedelta(days=30),
                   category=EventCategory.CULTURAL, current_attendees=42),
        make_event('sym', title='Research Symposium', date=NOW - timedelta(hours=1),
                   category=EventCategory.CONFERENCE, current_attendees=275, is_featured=True),
    ]
    for event in events:
        store._events.append(event)
    return events


@pytest.fixture
def engine(store, catalog):
    return QueryEngine(store, UTC)


def ids(events):
    return [event.id for event in events]


def test_empty_category_selection_is_identity(engine, catalog):
    assert engine.filter_by_categories(catalog, []) == catalog
    assert engine.filter_by_categories(catalog, list(EventCategory)) == catalog


def test_filter_by_categories_keeps_order(engine, catalog):
    result = engine.filter_by_categories(catalog, [EventCategory.CULTURAL, EventCategory.HACKATHON])
    assert ids(result) == ['hack', 'old']


def test_filter_accepts_category_values():
    events = [make_event('a', category=EventCategory.SPORTS), make_event('b')]
    assert ids(filter_by_categories(events, ['sports'])) == ['a']


@pytest.mark.parametrize("key", list(SortKey))
def test_sort_is_idempotent(catalog, key):
    once = sort_events(catalog, key)
    assert sort_events(once, key) == once


def test_sort_orders(engine, catalog):
    assert ids(engine.sort(catalog, SortKey.DATE_ASC)) == ['old', 'ai', 'sym', 'hack', 'fair']
    assert ids(engine.sort(catalog, SortKey.DATE_DESC)) == ['fair', 'hack', 'sym', 'ai', 'old']
    assert ids(engine.sort(catalog, SortKey.TITLE_ASC)) == ['ai', 'fair', 'hack', 'old', 'sym']
    assert ids(engine.sort(catalog, SortKey.TITLE_DESC)) == ['sym', 'old', 'hack', 'fair', 'ai']


def test_popularity_ties_keep_original_order(engine, catalog):
    # hack and old both have 42 attendees
    assert ids(engine.sort(catalog, SortKey.POPULARITY)) == ['sym', 'fair', 'ai', 'hack', 'old']


def test_empty_search_returns_everything(engine, catalog):
    assert engine.search("") == catalog


def test_search_is_case_insensitive_across_fields(engine):
    assert ids(engine.search("HACKATHON")) == ['hack']
    assert ids(engine.search("career services")) == ['fair']
    assert ids(engine.search("virtual")) == ['ai']
    assert engine.search("no such thing") == []


def test_search_within_given_events(engine, catalog):
    assert ids(engine.search("e", catalog[:2])) == ['hack', 'fair']


def test_featured(engine):
    assert ids(engine.list_featured()) == ['hack', 'sym']


def test_upcoming_is_strictly_future_and_sorted(engine, store):
    store._events.append(make_event('now', date=NOW))
    assert ids(engine.list_upcoming(NOW)) == ['hack', 'fair']


def test_current_includes_started_multi_day_events(engine):
    assert ids(engine.list_current(NOW)) == ['ai', 'sym']


def test_event_started_a_moment_ago_is_current_until_end_of_day(engine):
    event = make_event('x', date=NOW - timedelta(milliseconds=1))
    assert engine.is_current(event, NOW)

    last_instant = end_of_day(event.date, UTC)
    assert engine.is_current(event, last_instant)
    assert not engine.is_current(event, last_instant + timedelta(microseconds=1))


def test_end_of_day_uses_campus_timezone():
    oslo = get_campus_timezone('Europe/Oslo')
    # 23:30 UTC on the 10th is already the 11th in Oslo
    late = NOW.replace(hour=23, minute=30)
    assert end_of_day(late, oslo).date().isoformat() == '2025-03-11'
    assert end_of_day(late, UTC).date().isoformat() == '2025-03-10'


def test_list_view(engine, catalog):
    assert engine.list_view(EventView.ALL, NOW) == catalog
    assert ids(engine.list_view('upcoming', NOW)) == ['hack', 'fair']


def test_query_pipeline(engine):
    result = engine.query(
        view=EventView.ALL,
        search='a',
        categories=[EventCategory.FAIR, EventCategory.HACKATHON, EventCategory.WORKSHOP],
        sort=SortKey.POPULARITY,
        now=NOW,
    )
    assert ids(result) == ['fair', 'ai', 'hack']


def test_query_reads_current_catalog_state(engine, store):
    store.delete_event('hack')
    assert 'hack' not in ids(engine.query(now=NOW))
