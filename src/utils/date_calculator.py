"""
Date Utilities

Canonical ledger dates and the day arithmetic the scheduler relies on:
- DD-MM-YYYY text format with strict round-trip validation
- "Today" normalized to local midnight
- The portal accepts bookings exactly one day ahead
"""

from datetime import datetime, timedelta
from typing import Optional, Tuple

TARGET_DATE_FORMAT = "%d-%m-%Y"
TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M"

# Bookings open this many days before the parking date
BOOKING_LEAD_DAYS = 1


def start_of_day(moment: datetime) -> datetime:
    """Drop the time-of-day part so day-level comparisons are exact."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def today(now: Optional[datetime] = None) -> datetime:
    """
    Get today's date at local midnight.

    Args:
        now: Reference moment (default: datetime.now())
    """
    return start_of_day(now or datetime.now())


def format_date(value: datetime) -> str:
    """Format a date in the canonical ledger format (e.g. 09-03-2025)."""
    return value.strftime(TARGET_DATE_FORMAT)


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def parse_date(date_str: str) -> datetime:
    """
    Parse a canonical DD-MM-YYYY date.

    The text must reproduce itself exactly when formatted again, so
    unpadded input such as "1-3-2025" is rejected.

    Args:
        date_str: Date string like "31-12-2025"

    Returns:
        datetime at midnight

    Raises:
        ValueError: If the string is not a valid canonical date
    """
    try:
        parsed = datetime.strptime(date_str, TARGET_DATE_FORMAT)
    except (TypeError, ValueError):
        raise ValueError(
            f'Invalid date format: "{date_str}". Please use DD-MM-YYYY format (e.g., 31-12-2025).'
        )

    if format_date(parsed) != date_str:
        raise ValueError(
            f'Invalid date format: "{date_str}". Please use DD-MM-YYYY format (e.g., 31-12-2025).'
        )

    return parsed


def is_valid_date(date_str: str) -> bool:
    try:
        parse_date(date_str)
        return True
    except ValueError:
        return False


def get_day(value: datetime) -> str:
    """
    Day of month as the calendar widget labels it.

    Example:
        get_day(datetime(2025, 3, 9))  # "9"
    """
    return str(value.day)


def day_to_make_booking(parking_date: datetime) -> datetime:
    """The day on which a booking for parking_date has to be requested."""
    return start_of_day(parking_date) - timedelta(days=BOOKING_LEAD_DAYS)


def date_sort_key(date_str: str) -> Tuple[int, datetime]:
    """
    Sort key for ledger dates, oldest first.

    Unparsable dates are ordered after every valid one.
    """
    try:
        return (0, parse_date(date_str))
    except ValueError:
        return (1, datetime.max)
