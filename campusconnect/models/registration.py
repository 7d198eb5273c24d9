"""Registration model definition."""

from datetime import datetime
from typing import Any, Dict, Optional
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AttendeeInfo:
    """Details the attendee entered on the registration form."""
    name: str
    email: str
    student_id: Optional[str] = None
    department: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'email': self.email,
            'studentId': self.student_id,
            'department': self.department,
            'notes': self.notes,
        }


@dataclass(frozen=True)
class Registration:
    """
    One user's registration for one event.

    Registrations are never mutated after creation. At most one exists per
    (user_id, event_id); the eligibility check guarantees that before creation.

    Fields:
        id: Opaque unique identifier
        event_id: Id of the registered Event
        user_id: Opaque id from the identity provider
        registration_date: When the registration was created
        attendee_info: Form details of the attendee
    """
    id: str
    event_id: str
    user_id: str
    registration_date: datetime
    attendee_info: AttendeeInfo = field(compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'eventId': self.event_id,
            'userId': self.user_id,
            'registrationDate': self.registration_date.isoformat(),
            'attendeeInfo': self.attendee_info.to_dict(),
        }
