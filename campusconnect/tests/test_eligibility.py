from datetime import timedelta

import pytest

from campusconnect.eligibility import (
    EligibilityEvaluator,
    EligibilityOutcome,
    ensure_eligible,
    evaluate_eligibility,
    user_message,
)
from campusconnect.errors import IneligibleError
from campusconnect.models import Registration

from .conftest import NOW, make_event


def registration_for(user_id, event_id, attendee):
    return Registration(id='r1', event_id=event_id, user_id=user_id,
                        registration_date=NOW, attendee_info=attendee)


def test_eligible():
    event = make_event(max_attendees=10, current_attendees=5, registration_deadline=NOW + timedelta(days=1))
    assert evaluate_eligibility(event, 'u1', [], NOW) is EligibilityOutcome.ELIGIBLE


def test_unauthenticated_wins_over_everything():
    event = make_event(max_attendees=1, current_attendees=1, registration_deadline=NOW - timedelta(days=1))
    assert evaluate_eligibility(event, None, [], NOW) is EligibilityOutcome.NOT_AUTHENTICATED
    assert evaluate_eligibility(event, '', [], NOW) is EligibilityOutcome.NOT_AUTHENTICATED


def test_already_registered_reported_before_full_and_deadline(attendee):
    event = make_event(max_attendees=10, current_attendees=10, registration_deadline=NOW - timedelta(days=1))
    registrations = [registration_for('u1', event.id, attendee)]
    assert evaluate_eligibility(event, 'u1', registrations, NOW) is EligibilityOutcome.ALREADY_REGISTERED


def test_other_users_registration_is_not_a_duplicate(attendee):
    event = make_event()
    registrations = [registration_for('u2', event.id, attendee)]
    assert evaluate_eligibility(event, 'u1', registrations, NOW) is EligibilityOutcome.ELIGIBLE


@pytest.mark.parametrize("deadline", [None, NOW + timedelta(days=1), NOW - timedelta(days=1)])
def test_full_event_reports_full_regardless_of_deadline(deadline):
    event = make_event(max_attendees=3, current_attendees=3, registration_deadline=deadline)
    assert evaluate_eligibility(event, 'u1', [], NOW) is EligibilityOutcome.EVENT_FULL


def test_zero_capacity_is_full():
    event = make_event(max_attendees=0)
    assert evaluate_eligibility(event, 'u1', [], NOW) is EligibilityOutcome.EVENT_FULL


def test_no_capacity_limit_never_full():
    event = make_event(max_attendees=None, current_attendees=10_000)
    assert evaluate_eligibility(event, 'u1', [], NOW) is EligibilityOutcome.ELIGIBLE


def test_deadline_passed():
    event = make_event(registration_deadline=NOW - timedelta(seconds=1))
    assert evaluate_eligibility(event, 'u1', [], NOW) is EligibilityOutcome.DEADLINE_PASSED


def test_deadline_at_now_is_still_open():
    event = make_event(registration_deadline=NOW)
    assert evaluate_eligibility(event, 'u1', [], NOW) is EligibilityOutcome.ELIGIBLE


def test_ensure_eligible_raises_with_outcome():
    ensure_eligible(EligibilityOutcome.ELIGIBLE)

    with pytest.raises(IneligibleError) as exc_info:
        ensure_eligible(EligibilityOutcome.EVENT_FULL)
    assert exc_info.value.outcome is EligibilityOutcome.EVENT_FULL
    assert str(exc_info.value) == user_message(EligibilityOutcome.EVENT_FULL)[1]


def test_every_outcome_has_a_message():
    for outcome in EligibilityOutcome:
        title, description = user_message(outcome)
        assert title and description


def test_evaluator_uses_store_registrations(store, attendee):
    event = make_event(max_attendees=10, current_attendees=0)
    store._events.append(event)
    store.add_registration(event.id, 'u1', attendee, NOW)

    evaluator = EligibilityEvaluator(store)
    assert evaluator.evaluate(event, 'u1', NOW) is EligibilityOutcome.ALREADY_REGISTERED
    assert evaluator.evaluate(event, 'u2', NOW) is EligibilityOutcome.ELIGIBLE

    result = evaluator.to_dict(event, 'u1', NOW)
    assert result['allowed'] is False
    assert result['reason'] == 'already_registered'
    assert result['eventId'] == event.id
