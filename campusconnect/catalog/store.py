"""In-process catalog of events, announcements and registrations."""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

from ..errors import NotFoundError, ValidationError
from ..models import Announcement, AttendeeInfo, Event, Registration
from ..utils.timezone import ensure_aware, now_utc
from .parsing import apply_event_updates, event_from_dict

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Fresh opaque identifier."""
    return uuid.uuid4().hex


class CatalogStore:
    """
    Owner of the in-memory catalog.

    One store is constructed per process (or per test) and handed to every
    consumer; there is no module-level catalog. Reads always see current
    state, so administrative changes need no invalidation step. ``version``
    increases on every mutation so derived views can tell when to refresh.

    The store does not enforce the one-registration-per-user-and-event rule;
    the eligibility check does that before anything is written.
    """

    def __init__(
        self,
        events: Optional[Iterable[Event]] = None,
        announcements: Optional[Iterable[Announcement]] = None,
        tz: Optional[ZoneInfo] = None,
    ):
        self._events: List[Event] = list(events or [])
        self._announcements: List[Announcement] = list(announcements or [])
        self._registrations: List[Registration] = []
        self.tz = tz
        self.version = 0

    def _touch(self) -> None:
        self.version += 1

    # Events

    def list_events(self) -> List[Event]:
        """All events in insertion order (a new list, the same Event objects)."""
        return list(self._events)

    def get_event(self, event_id: str) -> Optional[Event]:
        return next((event for event in self._events if event.id == event_id), None)

    def require_event(self, event_id: str) -> Event:
        event = self.get_event(event_id)
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        return event

    def add_event(self, data: Dict[str, Any]) -> Event:
        """Create an event from wire-format data; it starts with no attendees."""
        event = event_from_dict(data, new_id(), self.tz)
        self._events.append(event)
        self._touch()
        logger.info(f"Added event {event.id}: {event.title}")
        return event

    def update_event(self, event_id: str, updates: Dict[str, Any]) -> Optional[Event]:
        """Apply a partial update; returns None when the event does not exist."""
        for index, event in enumerate(self._events):
            if event.id == event_id:
                updated = apply_event_updates(event, updates, self.tz)
                self._events[index] = updated
                self._touch()
                logger.info(f"Updated event {event_id}: {', '.join(sorted(updates))}")
                return updated
        return None

    def delete_event(self, event_id: str) -> bool:
        for index, event in enumerate(self._events):
            if event.id == event_id:
                del self._events[index]
                self._touch()
                logger.info(f"Deleted event {event_id}")
                return True
        return False

    # Announcements

    def list_announcements(self) -> List[Announcement]:
        """Announcements, newest first."""
        return sorted(self._announcements, key=lambda a: a.date, reverse=True)

    def add_announcement(self, data: Dict[str, Any], now: Optional[datetime] = None) -> Announcement:
        title = data.get('title')
        content = data.get('content')
        author = data.get('author')
        if not title or not content or not author:
            raise ValidationError("Announcement title, content and author are required")
        important = data.get('important', False)
        if not isinstance(important, bool):
            raise ValidationError("important must be true or false")
        announcement = Announcement(
            id=new_id(),
            title=title,
            content=content,
            date=ensure_aware(now, self.tz) if now else now_utc(),
            author=author,
            important=important,
        )
        self._announcements.append(announcement)
        self._touch()
        return announcement

    # Registrations

    def add_registration(
        self,
        event_id: str,
        user_id: str,
        attendee_info: AttendeeInfo,
        now: Optional[datetime] = None,
    ) -> Registration:
        """Record a registration and count the attendee on its event."""
        event = self.require_event(event_id)
        registration = Registration(
            id=new_id(),
            event_id=event_id,
            user_id=user_id,
            registration_date=now or now_utc(),
            attendee_info=attendee_info,
        )
        event.current_attendees += 1
        self._registrations.append(registration)
        self._touch()
        return registration

    def remove_registration(self, registration: Registration) -> None:
        """Undo ``add_registration``: drop the record and uncount the attendee."""
        remaining = [r for r in self._registrations if r.id != registration.id]
        if len(remaining) == len(self._registrations):
            raise NotFoundError(f"Registration {registration.id} not found")
        self._registrations = remaining
        event = self.get_event(registration.event_id)
        if event is not None and event.current_attendees > 0:
            event.current_attendees -= 1
        self._touch()

    def list_registrations(self) -> List[Registration]:
        return list(self._registrations)

    def registrations_for_user(self, user_id: str) -> List[Registration]:
        return [r for r in self._registrations if r.user_id == user_id]

    def registrations_for_event(self, event_id: str) -> List[Registration]:
        return [r for r in self._registrations if r.event_id == event_id]

    def is_user_registered(self, user_id: str, event_id: str) -> bool:
        return any(r.user_id == user_id and r.event_id == event_id for r in self._registrations)
