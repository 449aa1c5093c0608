"""
Add Booking

Queues a parking date in the ledger, or re-queues one whose last attempt
failed or found no space.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List

from src.ledger.ledger_store import LedgerStore
from src.models.booking import RESETTABLE_STATUSES, BookingRecord, BookingStatus
from src.utils.date_calculator import date_sort_key, format_date, parse_date
from src.utils.logger import get_logger

logger = get_logger("add_booking")

READDED_MESSAGE = "Re-added by user"


class AddAction(Enum):
    ADDED = "added"
    RESET = "reset"
    UNCHANGED = "unchanged"
    INVALID = "invalid"


@dataclass
class AddBookingResult:
    action: AddAction
    parking_date: str
    saved: bool = False
    message: str = ""

    @property
    def exit_code(self) -> int:
        if self.action == AddAction.INVALID:
            return 1
        if self.action == AddAction.UNCHANGED:
            return 0
        return 0 if self.saved else 1


def sort_records(records: List[BookingRecord]) -> List[BookingRecord]:
    """Order records by parking date, oldest first."""
    return sorted(records, key=lambda record: date_sort_key(record.parking_date))


def add_booking_entry(
    date_str: str,
    store: LedgerStore,
    clock: Callable[[], datetime] = datetime.now,
) -> AddBookingResult:
    """
    Add or re-queue a parking date.

    - New date: appended as pending with created_at = today
    - Existing failed/no_space: reset to pending
    - Existing pending/booked: left alone

    Args:
        date_str: Date in DD-MM-YYYY format
        store: Ledger storage
        clock: Returns the current local time

    Returns:
        AddBookingResult describing what happened
    """
    try:
        parse_date(date_str)
    except ValueError as e:
        logger.error(str(e))
        return AddBookingResult(AddAction.INVALID, date_str, message=str(e))

    records = store.load()
    existing = next((record for record in records if record.parking_date == date_str), None)

    if existing is not None:
        logger.warning(f"Booking for {date_str} already exists with status: {existing.status.value}.")
        if existing.status not in RESETTABLE_STATUSES:
            return AddBookingResult(
                AddAction.UNCHANGED,
                date_str,
                message=f"Already {existing.status.value}",
            )
        existing.reset_to_pending(READDED_MESSAGE)
        action = AddAction.RESET
        logger.info(f"Status for {date_str} reset to 'pending'.")
    else:
        records.append(BookingRecord(
            parking_date=date_str,
            status=BookingStatus.PENDING,
            created_at=format_date(clock()),
        ))
        action = AddAction.ADDED
        logger.info(f"Added new booking for {date_str}")

    saved = store.save(sort_records(records))
    return AddBookingResult(action, date_str, saved=saved, message=action.value)
