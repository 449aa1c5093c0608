"""
Site Driver Interface
Abstract contract for driving the parking portal through one booking attempt.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from src.exceptions import DriverStateError
from src.models.booking import BookingStatus


class DriverState(Enum):
    """Booking attempt states, in order"""
    LOGGED_OUT = "logged_out"
    AUTHENTICATING = "authenticating"
    ON_BOOKING_FORM = "on_booking_form"
    DATE_SELECTED = "date_selected"
    ZONE_RESOLVED = "zone_resolved"
    SUBMITTED = "submitted"
    BOOKED = "booked"
    NO_SPACE = "no_space"
    FAILED = "failed"


class SubmissionOutcome(Enum):
    """What the portal reported after submitting a request"""
    BOOKED = "booked"
    NO_SPACE = "no_space"
    FAILED = "failed"

    @property
    def status(self) -> BookingStatus:
        return BookingStatus(self.value)

    @property
    def final_state(self) -> DriverState:
        return DriverState(self.value)


# Order in which outcome indicators are checked
OUTCOME_PRECEDENCE = (
    SubmissionOutcome.BOOKED,
    SubmissionOutcome.NO_SPACE,
    SubmissionOutcome.FAILED,
)


def classify_outcome(visible: Iterable[SubmissionOutcome]) -> SubmissionOutcome:
    """
    Classify a submission from the indicators currently visible.

    Exactly one visible indicator decides the outcome. None, or more than
    one, is ambiguous and classifies as FAILED.

    Example:
        classify_outcome([SubmissionOutcome.BOOKED])  # BOOKED
        classify_outcome([SubmissionOutcome.BOOKED, SubmissionOutcome.FAILED])  # FAILED
    """
    seen = [outcome for outcome in OUTCOME_PRECEDENCE if outcome in set(visible)]
    if len(seen) == 1:
        return seen[0]
    return SubmissionOutcome.FAILED


class SiteDriver(ABC):
    """
    Base class for portal drivers.

    Public methods enforce the state order
    LoggedOut -> Authenticating -> OnBookingForm -> DateSelected
    -> ZoneResolved -> Submitted -> Booked | NoSpace | Failed
    and delegate the actual work to the underscore hooks. A hook that
    raises leaves the driver in FAILED.
    """

    def __init__(self):
        self.state = DriverState.LOGGED_OUT
        self.zone: Optional[str] = None

    def _enter(self, expected: DriverState, working: DriverState, operation: str):
        if self.state != expected:
            raise DriverStateError(
                f"Cannot {operation} in state {self.state.value}",
                details={"expected": expected.value, "actual": self.state.value},
            )
        self.state = working

    async def login(self, credentials) -> None:
        """
        Sign in and land on the booking request form.

        Raises:
            AuthenticationError: Bad credentials, timeout, or missing post-login markers
        """
        self._enter(DriverState.LOGGED_OUT, DriverState.AUTHENTICATING, "log in")
        try:
            await self._login(credentials)
        except Exception:
            self.state = DriverState.FAILED
            raise
        self.state = DriverState.ON_BOOKING_FORM

    async def select_date(self, date: datetime) -> None:
        """
        Pick the parking date in the calendar.

        Raises:
            UiInteractionError: Calendar or day cell not usable in time
        """
        self._enter(DriverState.ON_BOOKING_FORM, DriverState.ON_BOOKING_FORM, "select a date")
        try:
            await self._select_date(date)
        except Exception:
            self.state = DriverState.FAILED
            raise
        self.state = DriverState.DATE_SELECTED

    async def resolve_zone_availability(self) -> str:
        """
        Switch to the fallback zone if the default zone has no spaces.

        Never fails because of availability; returns the zone in use.
        """
        self._enter(DriverState.DATE_SELECTED, DriverState.DATE_SELECTED, "resolve zone")
        try:
            self.zone = await self._resolve_zone_availability()
        except Exception:
            self.state = DriverState.FAILED
            raise
        self.state = DriverState.ZONE_RESOLVED
        return self.zone

    async def submit(self) -> SubmissionOutcome:
        """
        Submit the request and classify what the portal reports.

        Raises:
            SiteTimeoutError: No outcome indicator appeared in time
            UiInteractionError: Submit control not usable
        """
        self._enter(DriverState.ZONE_RESOLVED, DriverState.SUBMITTED, "submit")
        try:
            outcome = await self._submit()
        except Exception:
            self.state = DriverState.FAILED
            raise
        self.state = outcome.final_state
        return outcome

    @abstractmethod
    async def _login(self, credentials) -> None:
        pass

    @abstractmethod
    async def _select_date(self, date: datetime) -> None:
        pass

    @abstractmethod
    async def _resolve_zone_availability(self) -> str:
        pass

    @abstractmethod
    async def _submit(self) -> SubmissionOutcome:
        pass
