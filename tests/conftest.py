"""Pytest configuration and common fixtures."""

import json
import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from config import BookingSettings, Credentials
from src.drivers.scripted_driver import ScriptedSiteDriver
from src.ledger.ledger_store import LedgerStore
from src.utils.logger import ErrorTracker, set_error_tracker

# 09-03-2025 04:30, the morning a booking for 10-03-2025 is due
RUN_TIME = datetime(2025, 3, 9, 4, 30)


@pytest.fixture(autouse=True)
def isolated_error_tracker(tmp_path):
    """Keep error logs written during tests out of the working tree."""
    tracker = ErrorTracker(tmp_path / "errors")
    set_error_tracker(tracker)
    yield tracker
    set_error_tracker(None)


@pytest.fixture
def bookings_file(tmp_path):
    return tmp_path / "bookings.json"


@pytest.fixture
def store(bookings_file):
    return LedgerStore(bookings_file)


@pytest.fixture
def write_ledger(bookings_file):
    """Write raw ledger entries to the bookings file."""

    def _write(entries):
        bookings_file.write_text(json.dumps(entries, indent=2), encoding="utf-8")
        return bookings_file

    return _write


@pytest.fixture
def read_ledger(bookings_file):
    """Read the raw ledger entries back."""

    def _read():
        return json.loads(bookings_file.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def settings(bookings_file):
    return BookingSettings(
        credentials=Credentials(username="driver@example.com", password="secret"),
        bookings_file=bookings_file,
        headless=True,
        retention_days=7,
    )


@pytest.fixture
def clock():
    return lambda: RUN_TIME


@pytest.fixture
def scripted_driver():
    return ScriptedSiteDriver()
