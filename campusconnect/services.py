"""Wiring of the campus events engine.

``CampusServices`` owns one catalog store and one durable registration store
and builds every component on top of them. The FastAPI app creates it once
at startup; tests create their own.
"""

import logging
from collections import OrderedDict
from datetime import datetime
from typing import List, Optional, Tuple

from .catalog import CatalogStore, sample_catalog
from .config import AppSettings
from .eligibility import EligibilityEvaluator
from .errors import RemoteFailure
from .models import Event
from .notifications import NotificationDeriver, NotificationFeed
from .persistence import DurableRegistrationStore, create_registration_store
from .query import QueryEngine
from .registration import RegistrationWriter
from .utils.timezone import get_campus_timezone

logger = logging.getLogger(__name__)

# Feeds kept in memory; the least recently used one is dropped beyond this
MAX_NOTIFICATION_FEEDS = 1000


class CampusServices:
    """Container for the store and the components reading or writing it."""

    def __init__(
        self,
        store: CatalogStore,
        registration_store: DurableRegistrationStore,
        settings: Optional[AppSettings] = None,
    ):
        self.settings = settings or AppSettings()
        tz = get_campus_timezone(self.settings.timezone)
        if store.tz is None:
            store.tz = tz

        self.store = store
        self.registration_store = registration_store
        self.queries = QueryEngine(store, tz)
        self.eligibility = EligibilityEvaluator(store)
        self.registrations = RegistrationWriter(store, registration_store)
        self.notifications = NotificationDeriver(
            store, registration_store, self.settings.reminder_window, tz
        )
        self._feeds: "OrderedDict[str, NotificationFeed]" = OrderedDict()
        self.max_feeds = MAX_NOTIFICATION_FEEDS

    async def notification_feed(self, user_id: str, now: Optional[datetime] = None) -> NotificationFeed:
        """
        Feed of ``user_id``, recomputed on first use and after any catalog change.
        """
        feed = self._feeds.get(user_id)
        if feed is None:
            feed = NotificationFeed(self.notifications, user_id)
            self._feeds[user_id] = feed
            while len(self._feeds) > self.max_feeds:
                self._feeds.popitem(last=False)
        else:
            self._feeds.move_to_end(user_id)
        if feed.is_stale(self.store.version):
            await feed.recompute(self.store.version, now)
        return feed

    def forget_user(self, user_id: str) -> None:
        """Drop the feed of a user who logged out."""
        self._feeds.pop(user_id, None)

    async def registration_counts(self) -> List[Tuple[Event, int]]:
        """Every event with its durable registration count (0 when the count fails)."""
        counts = []
        for event in self.store.list_events():
            try:
                count = await self.registration_store.count_registrations_for_event(event.id)
            except RemoteFailure as e:
                logger.error(f"Error fetching registration count for event {event.id}: {e}")
                count = 0
            counts.append((event, count))
        return counts

    def close(self) -> None:
        self.registration_store.close()


def build_services(settings: Optional[AppSettings] = None) -> CampusServices:
    """Create the services described by ``settings`` (environment by default)."""
    settings = settings or AppSettings()
    tz = get_campus_timezone(settings.timezone)

    if settings.seed_sample_data:
        events, announcements = sample_catalog()
        store = CatalogStore(events, announcements, tz=tz)
        logger.info(f"Loaded sample catalog with {len(events)} events")
    else:
        store = CatalogStore(tz=tz)

    registration_store = create_registration_store(settings.registration_store)
    return CampusServices(store, registration_store, settings)
