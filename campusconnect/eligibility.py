"""Registration eligibility.

Eligibility is decided by a fixed chain of gates. Each gate either blocks
with an outcome or passes; the first blocking gate is the single reason
reported to the user, so the order of ``GATES`` is part of the contract:
authentication, duplicate registration, capacity, deadline.
"""

from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple

from .catalog import CatalogStore
from .errors import IneligibleError
from .models import Event, Registration
from .utils.timezone import now_utc


class EligibilityOutcome(str, Enum):
    ELIGIBLE = 'eligible'
    NOT_AUTHENTICATED = 'not_authenticated'
    ALREADY_REGISTERED = 'already_registered'
    EVENT_FULL = 'event_full'
    DEADLINE_PASSED = 'deadline_passed'

    @property
    def allowed(self) -> bool:
        return self is EligibilityOutcome.ELIGIBLE


# (title, description) shown to the user for each outcome
USER_MESSAGES: Dict[EligibilityOutcome, Tuple[str, str]] = {
    EligibilityOutcome.ELIGIBLE: (
        "Registration open",
        "You can register for this event.",
    ),
    EligibilityOutcome.NOT_AUTHENTICATED: (
        "Authentication required",
        "Please log in to register for this event.",
    ),
    EligibilityOutcome.ALREADY_REGISTERED: (
        "Already registered",
        "You have already registered for this event.",
    ),
    EligibilityOutcome.EVENT_FULL: (
        "Event is full",
        "Sorry, this event has reached its maximum capacity.",
    ),
    EligibilityOutcome.DEADLINE_PASSED: (
        "Registration closed",
        "The registration deadline for this event has passed.",
    ),
}


class _Check:
    """Inputs shared by the gates of one evaluation."""

    def __init__(self, event: Event, user_id: Optional[str], registrations: Iterable[Registration], now: datetime):
        self.event = event
        self.user_id = user_id
        self.registrations = registrations
        self.now = now


def _authentication_gate(check: _Check) -> Optional[EligibilityOutcome]:
    if not check.user_id:
        return EligibilityOutcome.NOT_AUTHENTICATED
    return None


def _duplicate_gate(check: _Check) -> Optional[EligibilityOutcome]:
    for registration in check.registrations:
        if registration.user_id == check.user_id and registration.event_id == check.event.id:
            return EligibilityOutcome.ALREADY_REGISTERED
    return None


def _capacity_gate(check: _Check) -> Optional[EligibilityOutcome]:
    if check.event.is_full:
        return EligibilityOutcome.EVENT_FULL
    return None


def _deadline_gate(check: _Check) -> Optional[EligibilityOutcome]:
    deadline = check.event.registration_deadline
    if deadline is not None and deadline < check.now:
        return EligibilityOutcome.DEADLINE_PASSED
    return None


GATES: Tuple[Callable[[_Check], Optional[EligibilityOutcome]], ...] = (
    _authentication_gate,
    _duplicate_gate,
    _capacity_gate,
    _deadline_gate,
)


def evaluate_eligibility(
    event: Event,
    user_id: Optional[str],
    registrations: Iterable[Registration],
    now: Optional[datetime] = None,
) -> EligibilityOutcome:
    """
    Decide whether ``user_id`` may register for ``event``.

    Args:
        event: The event being registered for
        user_id: Opaque id from the identity provider, None when logged out
        registrations: Known registrations (checked for a duplicate)
        now: Instant to compare the deadline against

    Returns:
        EligibilityOutcome: ELIGIBLE, or the first failing gate's outcome
    """
    check = _Check(event, user_id, registrations, now or now_utc())
    for gate in GATES:
        outcome = gate(check)
        if outcome is not None:
            return outcome
    return EligibilityOutcome.ELIGIBLE


def user_message(outcome: EligibilityOutcome) -> Tuple[str, str]:
    return USER_MESSAGES[EligibilityOutcome(outcome)]


def ensure_eligible(outcome: EligibilityOutcome) -> None:
    """Raise IneligibleError unless ``outcome`` allows registration."""
    if not outcome.allowed:
        title, description = user_message(outcome)
        raise IneligibleError(outcome, description)


class EligibilityEvaluator:
    """Evaluates eligibility against the registrations held by a CatalogStore."""

    def __init__(self, store: CatalogStore):
        self.store = store

    def evaluate(self, event: Event, user_id: Optional[str], now: Optional[datetime] = None) -> EligibilityOutcome:
        registrations = self.store.registrations_for_user(user_id) if user_id else []
        return evaluate_eligibility(event, user_id, registrations, now)

    def to_dict(self, event: Event, user_id: Optional[str], now: Optional[datetime] = None) -> Dict[str, object]:
        """Outcome with its user-facing message, for the HTTP layer."""
        outcome = self.evaluate(event, user_id, now)
        title, description = user_message(outcome)
        return {
            'eventId': event.id,
            'allowed': outcome.allowed,
            'reason': outcome.value,
            'title': title,
            'message': description,
        }
