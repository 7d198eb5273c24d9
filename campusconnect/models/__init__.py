"""Models package initialization."""

from .base import Base
from .event import Event, EventCategory, CATEGORY_LABELS
from .registration import AttendeeInfo, Registration
from .announcement import Announcement
from .notification import Notification, NotificationType
from .registration_record import RegistrationRecord

__all__ = [
    'Base',
    'Event',
    'EventCategory',
    'CATEGORY_LABELS',
    'AttendeeInfo',
    'Registration',
    'Announcement',
    'Notification',
    'NotificationType',
    'RegistrationRecord',
]
