"""Notification model definition."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from dataclasses import dataclass


class NotificationType(str, Enum):
    REMINDER = 'reminder'
    SYSTEM = 'system'
    EVENT = 'event'


@dataclass
class Notification:
    """
    Derived, never persisted notification.

    ``id`` is deterministic (derived from the source event or kind), so a
    consumer may correlate read state across recomputations if it stores read
    ids itself. The ``read`` flag on this object is lost whenever the list is
    regenerated.
    """
    id: str
    title: str
    message: str
    date: datetime
    type: NotificationType
    read: bool = False
    event_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'message': self.message,
            'date': self.date.isoformat(),
            'read': self.read,
            'eventId': self.event_id,
            'type': self.type.value,
        }
