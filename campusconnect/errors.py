"""Error taxonomy of the campus events engine.

Query and eligibility operations never raise; they return outcomes. Only
administrative mutations (bad input, unknown ids), forced registrations and
calls to the durable registration store raise these.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .eligibility import EligibilityOutcome

GENERIC_RETRY_MESSAGE = (
    "There was an error processing your registration. Please try again."
)


class CampusConnectError(Exception):
    """Base exception for the campus events engine."""
    pass


class ValidationError(CampusConnectError):
    """Raised when administrative input is malformed (bad date, unknown category, ...)."""
    pass


class NotFoundError(CampusConnectError):
    """Raised when an operation references an event or registration that does not exist."""
    pass


class IneligibleError(CampusConnectError):
    """Raised when a registration is attempted although eligibility says no."""

    def __init__(self, outcome: "EligibilityOutcome", message: str):
        super().__init__(message)
        self.outcome = outcome


class RemoteFailure(CampusConnectError):
    """Raised when the durable registration store could not be reached or refused the call.

    ``str(error)`` carries the transport detail for logs; ``user_message`` is
    what may be shown to a user.
    """

    user_message = GENERIC_RETRY_MESSAGE
