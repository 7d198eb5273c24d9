"""Model for registrations kept in the relational durable store."""

from typing import Dict, Any
from sqlalchemy import Column, Integer, String, DateTime, JSON, Index

from .base import Base
from ..utils.timezone import ensure_aware, now_utc


class RegistrationRecord(Base):
    """
    Durable copy of a registration.

    The table mirrors the hosted ``event_registrations`` table so both durable
    backends store the same shape.

    Fields:
        id: Unique identifier (auto-generated)
        user_id: Opaque id of the registered user
        event_id: Id of the catalog event
        attendee_info: Form details as JSON (name, email, studentId, department, notes)
        created_at: When the registration was recorded
    """
    __tablename__ = 'event_registrations'
    __table_args__ = (
        Index('ix_event_registrations_user_id', 'user_id'),
        Index('ix_event_registrations_event_id', 'event_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False)
    event_id = Column(String, nullable=False)
    attendee_info = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    def __init__(self, **kwargs):
        """Initialize RegistrationRecord with the given attributes."""
        if kwargs.get('created_at') is not None:
            kwargs['created_at'] = ensure_aware(kwargs['created_at'])
        super().__init__(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'event_id': self.event_id,
            'attendee_info': self.attendee_info,
            'created_at': self.created_at,
        }

    def __str__(self) -> str:
        return f"RegistrationRecord(id={self.id}, user_id={self.user_id}, event_id={self.event_id})"
