"""
Parking Booking Workflow

One run per day:
1. Load bookings.json and pick the pending date that is due today
2. Drive the portal: login -> select date -> zone fallback -> submit
3. Write the outcome back to the record
4. Drop records that are no longer worth keeping, then save
"""

from contextlib import AsyncExitStack
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import AsyncContextManager, Callable, List, Optional, Tuple

from config import BookingSettings
from src.browser.session_manager import wayleadr_session
from src.exceptions import SiteInteractionError
from src.interfaces.site_driver import SiteDriver, SubmissionOutcome
from src.ledger.ledger_store import LedgerStore
from src.models.booking import BookingRecord, BookingStatus
from src.utils.date_calculator import format_date, format_timestamp, start_of_day
from src.utils.logger import get_logger, log_booking_failure
from src.workflows.booking_scheduler import select_candidate

logger = get_logger("workflow")

SessionFactory = Callable[[], AsyncContextManager[SiteDriver]]


@dataclass
class BookingRunResult:
    """What a single run did"""
    parking_date: Optional[str] = None
    status: Optional[BookingStatus] = None
    message: Optional[str] = None
    saved: bool = True

    @property
    def attempted(self) -> bool:
        return self.parking_date is not None

    @property
    def exit_code(self) -> int:
        """0 when nothing was due or the space was booked, 1 otherwise"""
        if not self.attempted or self.status == BookingStatus.BOOKED:
            return 0
        return 1


def should_keep(record: BookingRecord, today: datetime, retention_days: int) -> bool:
    """
    Retention rule for a single record.

    Kept: every pending record; no_space records for today or later;
    booked/failed records up to retention_days after their parking date.
    """
    if record.status == BookingStatus.PENDING:
        return True

    try:
        parking_day = record.parking_day
    except ValueError:
        return False

    if record.status == BookingStatus.NO_SPACE:
        return parking_day >= today
    return parking_day >= today - timedelta(days=retention_days)


def apply_retention(records: List[BookingRecord], today: datetime, retention_days: int = 7) -> List[BookingRecord]:
    """Filter the ledger down to records that still matter, keeping order."""
    kept = [record for record in records if should_keep(record, today, retention_days)]
    dropped = len(records) - len(kept)
    if dropped:
        logger.info(f"Pruned {dropped} old booking(s) from the ledger")
    return kept


def build_attempt_message(
    outcome: SubmissionOutcome, attempted_at: datetime, failure: Optional[str] = None, zone: Optional[str] = None
) -> str:
    """Human-readable note stored on the record after an attempt."""
    if outcome == SubmissionOutcome.BOOKED:
        message = f"Attempted on {format_timestamp(attempted_at)}. Result: {outcome.status.value}"
        if zone:
            message += f" ({zone} zone)"
        return message

    message = f"Booking not successful on {format_timestamp(attempted_at)}. Result: {outcome.status.value}"
    if failure:
        message += f" ({failure})"
    return message


def record_outcome(
    records: List[BookingRecord], parking_date: str, status: BookingStatus, attempted_on: str, message: str
) -> bool:
    """
    Store an attempt on the record for parking_date.

    Returns:
        False if no record has that date (logged, not an error)
    """
    for record in records:
        if record.parking_date == parking_date:
            record.record_attempt(status, attempted_on, message)
            return True

    logger.warning(f"Could not find booking for date {parking_date} to update status.")
    return False


class ParkingBookingWorkflow:
    """
    Books tomorrow's parking space if the ledger asks for it.

    Args:
        settings: Credentials and paths for this run
        session_factory: Returns an async context manager yielding a fresh
            SiteDriver (default: a new Playwright browser session)
        store: Ledger storage (default: LedgerStore at settings.bookings_file)
        clock: Returns the current local time (default: datetime.now)
    """

    def __init__(
        self,
        settings: BookingSettings,
        session_factory: Optional[SessionFactory] = None,
        store: Optional[LedgerStore] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings
        self.store = store or LedgerStore(settings.bookings_file)
        self.session_factory = session_factory or (lambda: wayleadr_session(headless=settings.headless))
        self.clock = clock

    async def run(self) -> BookingRunResult:
        """
        Execute one booking run.

        Returns:
            BookingRunResult; its exit_code is what the process should exit with
        """
        now = self.clock()
        today = start_of_day(now)

        records = self.store.load()
        candidate = select_candidate(records, today)
        if candidate is None:
            logger.info("No pending booking for today.")
            return BookingRunResult()

        parking_date = candidate.parking_date
        logger.info(f"Attempting to book parking for {parking_date}")

        async with AsyncExitStack() as stack:
            try:
                driver = await stack.enter_async_context(self.session_factory())
            except Exception as e:
                logger.exception(f"Could not start a browser session for {parking_date}")
                log_booking_failure(parking_date, e, step="session start")
                outcome, failure, zone = SubmissionOutcome.FAILED, f"session start failed: {type(e).__name__}: {e}", None
            else:
                outcome, failure = await self._attempt(driver, candidate)
                zone = driver.zone
            message = build_attempt_message(outcome, now, failure, zone=zone)

            record_outcome(records, parking_date, outcome.status, format_date(today), message)
            kept = apply_retention(records, today, self.settings.retention_days)
            saved = self.store.save(kept)

        if outcome == SubmissionOutcome.BOOKED:
            logger.info(f"Parking booked for {parking_date}")
        else:
            logger.warning(f"Parking for {parking_date} not booked: {outcome.status.value}")

        return BookingRunResult(
            parking_date=parking_date,
            status=outcome.status,
            message=message,
            saved=saved,
        )

    async def _attempt(self, driver: SiteDriver, candidate: BookingRecord) -> Tuple[SubmissionOutcome, Optional[str]]:
        """
        Walk the driver through one attempt.

        Returns:
            (outcome, failure context); any error maps to FAILED
        """
        step = "login"
        try:
            await driver.login(self.settings.credentials)

            step = "date selection"
            await driver.select_date(candidate.parking_day)

            step = "zone resolution"
            zone = await driver.resolve_zone_availability()
            logger.info(f"Requesting a space in the {zone} zone")

            step = "submission"
            outcome = await driver.submit()
        except SiteInteractionError as e:
            logger.error(f"Booking {candidate.parking_date} failed during {step}: {e.message}")
            log_booking_failure(candidate.parking_date, e, step=step)
            return SubmissionOutcome.FAILED, f"{step} failed: {e.message}"
        except Exception as e:
            logger.exception(f"Unexpected error during {step} for {candidate.parking_date}")
            log_booking_failure(candidate.parking_date, e, step=step, unexpected=True)
            return SubmissionOutcome.FAILED, f"{step} failed: {type(e).__name__}: {e}"

        return outcome, None
