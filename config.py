"""
Configuration management for Wayleadr Parking Bot
Loads environment variables and provides centralized config access
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from src.exceptions import ConfigurationError

# Load environment variables
load_dotenv()


class Config:
    """Central configuration class"""

    # Base paths
    BASE_DIR = Path(__file__).parent
    BOOKINGS_FILE = Path(os.getenv("BOOKINGS_FILE", str(BASE_DIR / "bookings.json")))
    SCREENSHOTS_DIR = BASE_DIR / "screenshots"
    LOGS_DIR = BASE_DIR / "logs"

    # Wayleadr portal
    WAYLEADR_URL = os.getenv("WAYLEADR_URL", "https://app.wayleadr.com")
    SIGN_IN_PATH = "/users/sign_in"

    # Browser Configuration
    HEADLESS = os.getenv("HEADLESS", "False").lower() == "true"
    TIMEOUT = int(os.getenv("TIMEOUT", "30000"))  # milliseconds

    # Per-step upper bounds (milliseconds)
    NAVIGATION_TIMEOUT = int(os.getenv("NAVIGATION_TIMEOUT", "60000"))
    LOGIN_TIMEOUT = int(os.getenv("LOGIN_TIMEOUT", "45000"))
    ELEMENT_TIMEOUT = int(os.getenv("ELEMENT_TIMEOUT", "10000"))
    SUBMIT_TIMEOUT = int(os.getenv("SUBMIT_TIMEOUT", "20000"))
    NO_SPACE_CHECK_TIMEOUT = int(os.getenv("NO_SPACE_CHECK_TIMEOUT", "3000"))
    OUTCOME_TIMEOUT = int(os.getenv("OUTCOME_TIMEOUT", "20000"))

    # Parking zones as labelled in the request form
    DEFAULT_ZONE = os.getenv("DEFAULT_ZONE", "Shared")
    FALLBACK_ZONE = os.getenv("FALLBACK_ZONE", "Paid")

    # Ledger retention: booked/failed records stay visible this many days
    # after their parking date
    RETENTION_DAYS = int(os.getenv("RETENTION_DAYS", "7"))

    # Logging Configuration
    MAX_BOOKING_LOG_SIZE_MB = int(os.getenv("MAX_BOOKING_LOG_SIZE_MB", "10"))
    LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))
    KEEP_SCREENSHOT_DAYS = int(os.getenv("KEEP_SCREENSHOT_DAYS", "5"))

    @classmethod
    def ensure_directories(cls):
        """Create necessary directories if they don't exist"""
        cls.SCREENSHOTS_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def sign_in_url(cls) -> str:
        return f"{cls.WAYLEADR_URL.rstrip('/')}{cls.SIGN_IN_PATH}"


@dataclass(frozen=True)
class Credentials:
    """Portal login credentials"""
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class BookingSettings:
    """
    Everything a single booking run needs, resolved up front.

    Built once by the entry script and handed to the workflow so nothing
    downstream reads process state on its own.
    """
    credentials: Credentials
    bookings_file: Path = Config.BOOKINGS_FILE
    headless: bool = Config.HEADLESS
    retention_days: int = Config.RETENTION_DAYS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BookingSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Raises:
            ConfigurationError: If WAYLEADR_USERNAME or WAYLEADR_PASSWORD is missing
        """
        env = os.environ if environ is None else environ

        username = env.get("WAYLEADR_USERNAME", "").strip()
        password = env.get("WAYLEADR_PASSWORD", "")
        missing = [
            name for name, value in (
                ("WAYLEADR_USERNAME", username),
                ("WAYLEADR_PASSWORD", password),
            ) if not value
        ]
        if missing:
            raise ConfigurationError(
                "Credentials not set",
                details={"missing": missing},
            )

        bookings_file = env.get("BOOKINGS_FILE")
        headless = env.get("HEADLESS")
        return cls(
            credentials=Credentials(username=username, password=password),
            bookings_file=Path(bookings_file) if bookings_file else Config.BOOKINGS_FILE,
            headless=headless.lower() == "true" if headless is not None else Config.HEADLESS,
            retention_days=int(env.get("RETENTION_DAYS", Config.RETENTION_DAYS)),
        )
