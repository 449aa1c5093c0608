"""
Booking Scheduler

Wayleadr only takes requests for tomorrow, so on any given day at most
one pending parking date can be attempted.
"""

from datetime import datetime
from typing import List, Optional

from src.models.booking import BookingRecord, BookingStatus
from src.utils.date_calculator import day_to_make_booking, today as local_today
from src.utils.logger import get_logger

logger = get_logger("scheduler")


def eligible_records(records: List[BookingRecord], today: datetime) -> List[BookingRecord]:
    """
    Pending records whose booking day is today, in ledger order.

    Records with malformed dates are skipped.
    """
    eligible = []
    for record in records:
        if record.status != BookingStatus.PENDING:
            continue
        try:
            booking_day = day_to_make_booking(record.parking_day)
        except ValueError:
            logger.warning(f"Ignoring pending booking with invalid date: {record.parking_date!r}")
            continue
        if booking_day == today:
            eligible.append(record)
    return eligible


def select_candidate(records: List[BookingRecord], today: Optional[datetime] = None) -> Optional[BookingRecord]:
    """
    Pick the booking to attempt today.

    Args:
        records: Full ledger
        today: Reference day at midnight (default: local today)

    Returns:
        The first eligible pending record in ledger order, or None
    """
    if today is None:
        today = local_today()

    eligible = eligible_records(records, today)
    if not eligible:
        return None

    if len(eligible) > 1:
        others = ", ".join(record.parking_date for record in eligible[1:])
        logger.warning(
            f"{len(eligible)} pending bookings are due today; "
            f"attempting {eligible[0].parking_date}, leaving {others}"
        )
    return eligible[0]
