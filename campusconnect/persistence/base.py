"""Interface of the durable registration store."""

from abc import ABC, abstractmethod
from typing import List

from ..models import AttendeeInfo


class DurableRegistrationStore(ABC):
    """
    Persistence collaborator that records registrations beyond process memory.

    Implementations must raise ``RemoteFailure`` for any failure so callers can
    tell failure from success without knowing the transport.

    Required Methods:
        insert_registration(): Record one registration
        list_registrations_for_user(): Event ids the user registered for
        count_registrations_for_event(): Number of registrations of an event
    """

    name = "durable"

    @abstractmethod
    async def insert_registration(self, user_id: str, event_id: str, attendee_info: AttendeeInfo) -> None:
        """Record that ``user_id`` registered for ``event_id``."""

    @abstractmethod
    async def list_registrations_for_user(self, user_id: str) -> List[str]:
        """Return the event ids ``user_id`` is registered for, oldest first."""

    @abstractmethod
    async def count_registrations_for_event(self, event_id: str) -> int:
        """Return how many registrations exist for ``event_id``."""

    def close(self) -> None:
        """Release transport resources; nothing to do by default."""
