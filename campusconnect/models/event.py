"""Event model definition."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from dataclasses import dataclass


class EventCategory(str, Enum):
    """Closed set of event categories."""
    HACKATHON = 'hackathon'
    WORKSHOP = 'workshop'
    FAIR = 'fair'
    SEMINAR = 'seminar'
    CONFERENCE = 'conference'
    CULTURAL = 'cultural'
    SPORTS = 'sports'
    OTHER = 'other'


# Display labels for the category filter; must cover every EventCategory
CATEGORY_LABELS: Dict[EventCategory, str] = {
    EventCategory.HACKATHON: 'Hackathons',
    EventCategory.WORKSHOP: 'Workshops',
    EventCategory.FAIR: 'Fairs',
    EventCategory.SEMINAR: 'Seminars',
    EventCategory.CONFERENCE: 'Conferences',
    EventCategory.CULTURAL: 'Cultural Events',
    EventCategory.SPORTS: 'Sports Events',
    EventCategory.OTHER: 'Other Events',
}

_missing_labels = set(EventCategory) - set(CATEGORY_LABELS)
if _missing_labels:
    raise RuntimeError(f"Categories without a label: {sorted(c.value for c in _missing_labels)}")


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class Event:
    """
    Event model representing one entry of the campus catalog.

    Fields:
        id: Opaque unique identifier
        title: Event title
        description: Event description
        date: When the event starts (timezone-aware)
        location: Where the event takes place
        category: One of EventCategory
        organizer: Department, club or office running the event
        end_date: Last day of a multi-day event, never before ``date`` (optional)
        image: URI of the event's image (optional)
        registration_deadline: Registration closes after this instant (optional)
        max_attendees: Capacity; None means unconstrained (optional)
        current_attendees: Number of registrations taken so far
        is_featured: Whether the event is shown in the featured list
    """
    id: str
    title: str
    description: str
    date: datetime
    location: str
    category: EventCategory
    organizer: str
    end_date: Optional[datetime] = None
    image: Optional[str] = None
    registration_deadline: Optional[datetime] = None
    max_attendees: Optional[int] = None
    current_attendees: int = 0
    is_featured: bool = False

    @property
    def is_full(self) -> bool:
        return self.max_attendees is not None and self.current_attendees >= self.max_attendees

    @property
    def spots_left(self) -> Optional[int]:
        if self.max_attendees is None:
            return None
        return max(self.max_attendees - self.current_attendees, 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON wire format (camelCase keys, ISO-8601 instants)."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'date': _isoformat(self.date),
            'endDate': _isoformat(self.end_date),
            'location': self.location,
            'category': self.category.value,
            'organizer': self.organizer,
            'image': self.image,
            'registrationDeadline': _isoformat(self.registration_deadline),
            'maxAttendees': self.max_attendees,
            'currentAttendees': self.current_attendees,
            'spotsLeft': self.spots_left,
            'isFeatured': self.is_featured,
        }

    def __str__(self) -> str:
        return f"Event(id={self.id}, title={self.title}, date={_isoformat(self.date)})"
