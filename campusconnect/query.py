"""Event query engine: listing views, search, category filter and sorting.

Every operation is a pure read over the catalog's current state and never
raises. Callers pass ``now`` to pin the clock; it defaults to the current
instant.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from .catalog import CatalogStore
from .models import Event, EventCategory
from .utils.timezone import end_of_day, get_campus_timezone, now_utc

logger = logging.getLogger(__name__)


class SortKey(str, Enum):
    DATE_ASC = 'date-asc'
    DATE_DESC = 'date-desc'
    TITLE_ASC = 'title-asc'
    TITLE_DESC = 'title-desc'
    POPULARITY = 'popularity'


class EventView(str, Enum):
    """Listing tabs of the events page."""
    ALL = 'all'
    FEATURED = 'featured'
    CURRENT = 'current'
    UPCOMING = 'upcoming'


# (key function, descending) per sort key. Python's sort is stable in both
# directions, so equal keys keep their incoming relative order.
_SORT_ORDERS: Dict[SortKey, Tuple[Callable[[Event], object], bool]] = {
    SortKey.DATE_ASC: (lambda event: event.date, False),
    SortKey.DATE_DESC: (lambda event: event.date, True),
    SortKey.TITLE_ASC: (lambda event: event.title.casefold(), False),
    SortKey.TITLE_DESC: (lambda event: event.title.casefold(), True),
    SortKey.POPULARITY: (lambda event: event.current_attendees, True),
}

_SEARCH_FIELDS = ('title', 'description', 'organizer', 'location')


def matches_query(event: Event, query: str) -> bool:
    """Case-insensitive substring match on title, description, organizer or location."""
    needle = query.casefold()
    return any(needle in (getattr(event, field) or '').casefold() for field in _SEARCH_FIELDS)


def filter_by_categories(events: Iterable[Event], categories: Iterable[EventCategory]) -> List[Event]:
    """Keep events in ``categories``; an empty selection means no constraint."""
    selected = {EventCategory(category) for category in categories}
    if not selected:
        return list(events)
    return [event for event in events if event.category in selected]


def sort_events(events: Iterable[Event], key: SortKey) -> List[Event]:
    """Stable sort by ``key``; ties keep their original relative order."""
    key_func, descending = _SORT_ORDERS[SortKey(key)]
    return sorted(events, key=key_func, reverse=descending)


class QueryEngine:
    """Read-only views over a CatalogStore."""

    def __init__(self, store: CatalogStore, tz: Optional[ZoneInfo] = None):
        self.store = store
        self.tz = tz or get_campus_timezone()

    def list_all(self) -> List[Event]:
        return self.store.list_events()

    def list_featured(self) -> List[Event]:
        return [event for event in self.store.list_events() if event.is_featured]

    def list_upcoming(self, now: Optional[datetime] = None) -> List[Event]:
        """Events starting strictly after ``now``, soonest first."""
        now = now or now_utc()
        upcoming = [event for event in self.store.list_events() if event.date > now]
        return sort_events(upcoming, SortKey.DATE_ASC)

    def is_current(self, event: Event, now: Optional[datetime] = None) -> bool:
        """Started, and not past the end of its last day (campus-local)."""
        now = now or now_utc()
        last_day = event.end_date or event.date
        return event.date <= now <= end_of_day(last_day, self.tz)

    def list_current(self, now: Optional[datetime] = None) -> List[Event]:
        now = now or now_utc()
        return [event for event in self.store.list_events() if self.is_current(event, now)]

    def list_view(self, view: EventView, now: Optional[datetime] = None) -> List[Event]:
        view = EventView(view)
        if view is EventView.FEATURED:
            return self.list_featured()
        if view is EventView.CURRENT:
            return self.list_current(now)
        if view is EventView.UPCOMING:
            return self.list_upcoming(now)
        return self.list_all()

    def search(self, query: str, events: Optional[Sequence[Event]] = None) -> List[Event]:
        """
        Events matching ``query`` (see ``matches_query``).

        Searches ``events`` when given, the whole catalog otherwise. The empty
        string is a substring of everything, so ``search("")`` returns every
        event.
        """
        source = self.store.list_events() if events is None else events
        return [event for event in source if matches_query(event, query)]

    def filter_by_categories(self, events: Iterable[Event], categories: Iterable[EventCategory]) -> List[Event]:
        return filter_by_categories(events, categories)

    def sort(self, events: Iterable[Event], key: SortKey) -> List[Event]:
        return sort_events(events, key)

    def query(
        self,
        view: EventView = EventView.ALL,
        search: Optional[str] = None,
        categories: Iterable[EventCategory] = (),
        sort: Optional[SortKey] = None,
        now: Optional[datetime] = None,
    ) -> List[Event]:
        """
        Events page pipeline: view, then search, then category filter, then sort.

        ``search=None`` skips the search step. Without a sort key the view's
        own order is kept.
        """
        events = self.list_view(view, now)
        if search is not None:
            events = self.search(search, events)
        events = self.filter_by_categories(events, categories)
        if sort is not None:
            events = self.sort(events, sort)
        logger.debug(f"Query view={view} search={search!r} sort={sort} -> {len(events)} events")
        return events
