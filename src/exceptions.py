"""Custom exception classes for Wayleadr Parking Bot."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class ParkingBotError(Exception):
    """Base exception for the parking bot."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp,
        }


class ConfigurationError(ParkingBotError):
    """Required configuration is missing or invalid. Fatal."""


class LedgerIOError(ParkingBotError):
    """Reading or writing the bookings ledger failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, details={"path": path} if path else None)
        self.path = path


# ========== Site interaction ==========


class SiteInteractionError(ParkingBotError):
    """
    Base class for failures while driving the booking portal.

    These never crash a run: the workflow records them as a failed attempt.
    """


class AuthenticationError(SiteInteractionError):
    """Login failed or the booking form was never reached."""

    def __init__(self, message: str = "Login failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class UiInteractionError(SiteInteractionError):
    """An element could not be located or activated within its timeout."""


class SiteTimeoutError(SiteInteractionError):
    """No outcome indicator appeared after submitting."""

    def __init__(self, message: str = "Timed out waiting for booking outcome", timeout: Optional[int] = None):
        super().__init__(message, details={"timeout_ms": timeout} if timeout else None)
        self.timeout = timeout


class DriverStateError(ParkingBotError):
    """A driver operation was called out of order."""
