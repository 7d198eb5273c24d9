"""Conversion of wire-format dictionaries into catalog objects.

Administrative callers send camelCase dictionaries (the same keys
``Event.to_dict`` produces). Everything malformed raises ValidationError.
"""

from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from ..errors import ValidationError
from ..models import Event, EventCategory
from ..utils.timezone import ensure_aware

# Wire key -> Event attribute, for the keys an administrator may set
EVENT_FIELDS = {
    'title': 'title',
    'description': 'description',
    'date': 'date',
    'endDate': 'end_date',
    'location': 'location',
    'category': 'category',
    'organizer': 'organizer',
    'image': 'image',
    'registrationDeadline': 'registration_deadline',
    'maxAttendees': 'max_attendees',
    'isFeatured': 'is_featured',
}
REQUIRED_EVENT_FIELDS = ('title', 'description', 'date', 'location', 'category', 'organizer')
READ_ONLY_EVENT_FIELDS = ('id', 'currentAttendees', 'spotsLeft')

# Minimum lengths enforced by the event form
MIN_LENGTHS = {
    'title': 2,
    'description': 10,
    'location': 2,
    'organizer': 2,
}


def parse_datetime(value: Any, field: str, tz: Optional[ZoneInfo] = None) -> datetime:
    """
    Parse an ISO-8601 instant or a YYYY-MM-DD date.

    A trailing 'Z' is accepted. Naive values and bare dates are read in the
    campus timezone; bare dates become midnight.

    Raises:
        ValidationError: If the value is not a datetime or parseable string
    """
    if isinstance(value, datetime):
        return ensure_aware(value, tz)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid datetime for {field}: {value!r}")
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError as e:
        raise ValidationError(f"Invalid datetime for {field}: {value!r}") from e
    return ensure_aware(parsed, tz)


def _parse_text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    value = value.strip()
    minimum = MIN_LENGTHS.get(field, 0)
    if len(value) < minimum:
        raise ValidationError(f"{field} must be at least {minimum} characters")
    return value


def _parse_optional_text(value: Any, field: str) -> Optional[str]:
    if value is None or value == '':
        return None
    return _parse_text(value, field)


def _parse_category(value: Any) -> EventCategory:
    try:
        return EventCategory(value)
    except ValueError as e:
        allowed = ', '.join(c.value for c in EventCategory)
        raise ValidationError(f"Unknown category {value!r}; expected one of: {allowed}") from e


def _parse_max_attendees(value: Any) -> Optional[int]:
    if value is None:
        return None
    # bool is an int subclass but never a valid capacity
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"maxAttendees must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError("maxAttendees must not be negative")
    return value


def _parse_bool(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field} must be true or false")
    return value


def _parse_event_value(key: str, value: Any, tz: Optional[ZoneInfo]) -> Any:
    if key == 'date':
        return parse_datetime(value, key, tz)
    if key in ('endDate', 'registrationDeadline'):
        return None if value in (None, '') else parse_datetime(value, key, tz)
    if key == 'category':
        return _parse_category(value)
    if key == 'maxAttendees':
        return _parse_max_attendees(value)
    if key == 'isFeatured':
        return _parse_bool(value, key)
    if key == 'image':
        return _parse_optional_text(value, key)
    return _parse_text(value, key)


def _check_keys(data: Dict[str, Any]) -> None:
    if not isinstance(data, dict):
        raise ValidationError("Event data must be an object")
    read_only = [key for key in data if key in READ_ONLY_EVENT_FIELDS]
    if read_only:
        raise ValidationError(f"Fields cannot be set directly: {', '.join(read_only)}")
    unknown = [key for key in data if key not in EVENT_FIELDS]
    if unknown:
        raise ValidationError(f"Unknown event fields: {', '.join(unknown)}")


def _check_event(event: Event) -> Event:
    if event.end_date is not None and event.end_date < event.date:
        raise ValidationError("endDate must not be before date")
    if event.max_attendees is not None and event.current_attendees > event.max_attendees:
        raise ValidationError(
            f"maxAttendees ({event.max_attendees}) is below the current attendee count "
            f"({event.current_attendees})"
        )
    return event


def event_from_dict(data: Dict[str, Any], event_id: str, tz: Optional[ZoneInfo] = None) -> Event:
    """
    Build a new Event from administrative input.

    Args:
        data: Wire-format event fields
        event_id: Id to assign to the new event
        tz: Zone for naive and date-only instants (campus timezone by default)

    Returns:
        Event: New event with no attendees

    Raises:
        ValidationError: If required fields are missing or any value is invalid
    """
    _check_keys(data)
    missing_fields = [field for field in REQUIRED_EVENT_FIELDS if data.get(field) in (None, '')]
    if missing_fields:
        raise ValidationError(f"Missing required fields: {', '.join(missing_fields)}")

    values = {
        EVENT_FIELDS[key]: _parse_event_value(key, value, tz)
        for key, value in data.items()
    }
    values.setdefault('is_featured', False)
    return _check_event(Event(id=event_id, current_attendees=0, **values))


def apply_event_updates(event: Event, updates: Dict[str, Any], tz: Optional[ZoneInfo] = None) -> Event:
    """
    Return a copy of ``event`` with the partial wire-format ``updates`` applied.

    Required fields may be changed but not cleared.

    Raises:
        ValidationError: If any key or value is invalid
    """
    _check_keys(updates)
    cleared = [key for key in REQUIRED_EVENT_FIELDS if key in updates and updates[key] in (None, '')]
    if cleared:
        raise ValidationError(f"Required fields cannot be cleared: {', '.join(cleared)}")

    values = {
        EVENT_FIELDS[key]: _parse_event_value(key, value, tz)
        for key, value in updates.items()
    }
    return _check_event(replace(event, **values))
