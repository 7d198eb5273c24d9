"""Registration writer.

A registration is applied to the in-memory catalog first and then confirmed
with the durable store. If confirmation fails the local change is
compensated (registration removed, attendee uncounted) and the failure is
raised to the caller: a registration either fully succeeds or reports an
error, never a partial success.

The writer does not re-run the eligibility chain; callers check it first.
Two overlapping submissions for the same user and event can both pass that
check while the first one is waiting on the durable store. The capacity
limit, however, is re-checked here because no registration may push an
event past ``max_attendees``.
"""

import logging
from datetime import datetime
from typing import Optional

from .catalog import CatalogStore
from .eligibility import EligibilityOutcome, user_message
from .errors import IneligibleError, RemoteFailure
from .models import AttendeeInfo, Registration
from .persistence import DurableRegistrationStore

logger = logging.getLogger(__name__)


class RegistrationWriter:
    """Records registrations in the catalog and the durable store."""

    def __init__(self, store: CatalogStore, durable_store: DurableRegistrationStore):
        self.store = store
        self.durable_store = durable_store

    async def register(
        self,
        event_id: str,
        user_id: str,
        attendee_info: AttendeeInfo,
        now: Optional[datetime] = None,
    ) -> Registration:
        """
        Register ``user_id`` for ``event_id``.

        Args:
            event_id: Catalog event id
            user_id: Opaque user id (already checked by the eligibility chain)
            attendee_info: Details from the registration form
            now: Registration timestamp, the current instant by default

        Returns:
            Registration: The created registration

        Raises:
            NotFoundError: If the event does not exist
            IneligibleError: If the event is already at capacity
            RemoteFailure: If the durable store did not confirm; the local
                registration has been rolled back
        """
        event = self.store.require_event(event_id)
        if event.is_full:
            _, description = user_message(EligibilityOutcome.EVENT_FULL)
            raise IneligibleError(EligibilityOutcome.EVENT_FULL, description)

        registration = self.store.add_registration(event_id, user_id, attendee_info, now)

        try:
            await self.durable_store.insert_registration(user_id, event_id, attendee_info)
        except BaseException as e:
            # Also undone on cancellation while waiting for the store
            self.store.remove_registration(registration)
            logger.error(
                f"Registration {registration.id} of {user_id} for event {event_id} "
                f"was not confirmed by the {self.durable_store.name} store ({e!r}); rolled back"
            )
            raise

        logger.info(f"Registered {user_id} for event {event_id} ({registration.id})")
        return registration
