"""Routes package initialization."""

from . import (
    admin,
    announcements,
    dashboard,
    events,
    health,
    notifications,
    registrations
)

__all__ = [
    'admin',
    'announcements',
    'dashboard',
    'events',
    'health',
    'notifications',
    'registrations'
]
