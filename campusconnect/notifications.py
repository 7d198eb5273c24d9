"""Notification derivation and per-user notification feeds.

Notifications are never stored. Every recomputation rebuilds the full list
from the catalog and the durable registration store, in a fixed order:
welcome, registration confirmations, reminders. Read flags live only on the
current list and are lost when it is rebuilt.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from .catalog import CatalogStore
from .errors import RemoteFailure
from .models import Event, Notification, NotificationType
from .persistence import DurableRegistrationStore
from .utils.timezone import get_campus_timezone, now_utc

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_WINDOW = timedelta(days=3)

WELCOME_ID = 'welcome'


def reminder_id(event_id: str) -> str:
    return f"event-reminder-{event_id}"


def confirmation_id(event_id: str) -> str:
    return f"registration-{event_id}"


def events_in_reminder_window(events: Iterable[Event], now: datetime, window: timedelta) -> List[Event]:
    """Events starting in (now, now + window]."""
    return [event for event in events if now < event.date <= now + window]


class NotificationDeriver:
    """Builds the notification list of one user."""

    def __init__(
        self,
        store: CatalogStore,
        durable_store: DurableRegistrationStore,
        window: timedelta = DEFAULT_REMINDER_WINDOW,
        tz: Optional[ZoneInfo] = None,
    ):
        self.store = store
        self.durable_store = durable_store
        self.window = window
        self.tz = tz or get_campus_timezone()

    def _format_date(self, event: Event) -> str:
        return event.date.astimezone(self.tz).strftime('%d %b %Y')

    def welcome(self, now: datetime) -> Notification:
        return Notification(
            id=WELCOME_ID,
            title='Welcome to CampusConnect',
            message='Thanks for joining our platform. Start exploring campus events!',
            date=now,
            type=NotificationType.SYSTEM,
        )

    def reminders(self, now: datetime) -> List[Notification]:
        return [
            Notification(
                id=reminder_id(event.id),
                title='Event Reminder',
                message=f"{event.title} is happening soon on {self._format_date(event)}",
                date=now,
                type=NotificationType.REMINDER,
                event_id=event.id,
            )
            for event in events_in_reminder_window(self.store.list_events(), now, self.window)
        ]

    async def confirmations(self, user_id: str, now: datetime) -> List[Notification]:
        """One confirmation per durable registration whose event is in the catalog.

        Raises:
            RemoteFailure: If the durable store cannot be read
        """
        registered_ids = set(await self.durable_store.list_registrations_for_user(user_id))
        return [
            Notification(
                id=confirmation_id(event.id),
                title='Registration Confirmation',
                message=f"You are registered for {event.title} on {self._format_date(event)}",
                date=now,
                type=NotificationType.EVENT,
                event_id=event.id,
            )
            for event in self.store.list_events()
            if event.id in registered_ids
        ]

    async def derive(self, user_id: Optional[str], now: Optional[datetime] = None) -> List[Notification]:
        """
        Notifications for ``user_id``; empty when nobody is logged in.

        A durable store failure only drops the confirmations; it is logged and
        never raised.
        """
        if not user_id:
            return []
        now = now or now_utc()

        reminders = self.reminders(now)
        try:
            confirmations = await self.confirmations(user_id, now)
        except RemoteFailure as e:
            logger.warning(f"Skipping registration confirmations for {user_id}: {e}")
            confirmations = []

        return [self.welcome(now), *confirmations, *reminders]


class NotificationFeed:
    """
    Current notifications of one user, with client-side read state.

    ``recompute`` replaces the whole list (read flags reset). When two
    recomputations overlap, whichever finishes last wins.
    """

    def __init__(self, deriver: NotificationDeriver, user_id: str):
        self.deriver = deriver
        self.user_id = user_id
        self.notifications: List[Notification] = []
        self.catalog_version: Optional[int] = None

    def is_stale(self, catalog_version: int) -> bool:
        return self.catalog_version != catalog_version

    async def recompute(self, catalog_version: Optional[int] = None, now: Optional[datetime] = None) -> List[Notification]:
        notifications = await self.deriver.derive(self.user_id, now)
        self.notifications = notifications
        self.catalog_version = catalog_version
        return notifications

    def mark_as_read(self, notification_id: str) -> bool:
        """Mark one notification read; False when no notification has that id."""
        found = False
        for notification in self.notifications:
            if notification.id == notification_id:
                notification.read = True
                found = True
        return found

    def mark_all_as_read(self) -> None:
        for notification in self.notifications:
            notification.read = True

    @property
    def unread_count(self) -> int:
        return sum(1 for notification in self.notifications if not notification.read)

    def to_dict(self):
        return {
            'notifications': [notification.to_dict() for notification in self.notifications],
            'unreadCount': self.unread_count,
        }
