"""
Booking ledger records
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from src.utils.date_calculator import parse_date


class BookingStatus(Enum):
    """Lifecycle status of a ledger record"""
    PENDING = "pending"
    BOOKED = "booked"
    FAILED = "failed"
    NO_SPACE = "no_space"

    @classmethod
    def parse(cls, value: str) -> "BookingStatus":
        """Parse a stored status, accepting the legacy "no_spaces" spelling."""
        if value == "no_spaces":
            return cls.NO_SPACE
        return cls(value)


# Statuses a user may reset back to pending by re-adding the date
RESETTABLE_STATUSES = (BookingStatus.FAILED, BookingStatus.NO_SPACE)

REQUIRED_FIELDS = ("parking_date", "status", "created_at")


@dataclass
class BookingRecord:
    """One requested parking date and what happened to it"""
    parking_date: str  # DD-MM-YYYY
    status: BookingStatus
    created_at: str
    last_attempt: Optional[str] = None
    attempt_message: Optional[str] = None

    @property
    def parking_day(self) -> datetime:
        """Parsed parking date at midnight. Raises ValueError if malformed."""
        return parse_date(self.parking_date)

    def record_attempt(self, status: BookingStatus, attempted_on: str, message: Optional[str] = None):
        """Store the outcome of a booking attempt."""
        self.status = status
        self.last_attempt = attempted_on
        if message:
            self.attempt_message = message

    def reset_to_pending(self, message: str = "Re-added by user"):
        self.status = BookingStatus.PENDING
        self.last_attempt = None
        self.attempt_message = message

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "parking_date": self.parking_date,
            "status": self.status.value,
            "created_at": self.created_at,
        }
        if self.last_attempt is not None:
            data["last_attempt"] = self.last_attempt
        if self.attempt_message is not None:
            data["attempt_message"] = self.attempt_message
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookingRecord":
        """
        Build a record from its JSON object.

        Raises:
            ValueError: If a required field is missing or the status is unknown
        """
        if not isinstance(data, dict):
            raise ValueError(f"Booking entry must be an object, got {type(data).__name__}")

        missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
        if missing:
            raise ValueError(f"Booking entry missing required fields: {', '.join(missing)}")

        return cls(
            parking_date=str(data["parking_date"]),
            status=BookingStatus.parse(data["status"]),
            created_at=str(data["created_at"]),
            last_attempt=data.get("last_attempt"),
            attempt_message=data.get("attempt_message"),
        )
