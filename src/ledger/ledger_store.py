"""
Bookings ledger storage

The ledger is a JSON array of booking records kept in bookings.json.
Every save rewrites the whole file.
"""

import json
from pathlib import Path
from typing import List

from src.exceptions import LedgerIOError
from src.models.booking import BookingRecord
from src.utils.logger import get_logger

logger = get_logger("ledger")


class LedgerStore:
    """Loads and saves the ordered list of booking records"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read_entries(self) -> list:
        """
        Read the raw JSON entries.

        Raises:
            FileNotFoundError: If the ledger file does not exist
            LedgerIOError: If the file cannot be read or is not a JSON array
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise
        except (OSError, ValueError) as e:
            raise LedgerIOError(f"Error loading bookings: {e}", path=str(self.path)) from e

        if not isinstance(data, list):
            raise LedgerIOError(
                f"Error loading bookings: expected a JSON array, got {type(data).__name__}",
                path=str(self.path),
            )
        return data

    def load(self) -> List[BookingRecord]:
        """
        Load all valid booking records in file order.

        A missing file is an empty ledger. Unreadable files are logged and
        also treated as empty; malformed entries are skipped.
        """
        try:
            entries = self.read_entries()
        except FileNotFoundError:
            return []
        except LedgerIOError as e:
            logger.error(e.message)
            return []

        records = []
        for index, entry in enumerate(entries):
            try:
                records.append(BookingRecord.from_dict(entry))
            except ValueError as e:
                logger.debug(f"Skipping ledger entry {index}: {e}")
        return records

    def write_entries(self, entries: list):
        """
        Overwrite the ledger file with the given entries.

        Raises:
            LedgerIOError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(entries, f, indent=2, ensure_ascii=False)
                f.write('\n')
        except OSError as e:
            raise LedgerIOError(f"Error saving bookings: {e}", path=str(self.path)) from e

    def save(self, records: List[BookingRecord]) -> bool:
        """
        Persist the full list of records.

        Returns:
            True if saved, False if writing failed (the error is logged)
        """
        try:
            self.write_entries([record.to_dict() for record in records])
        except LedgerIOError as e:
            logger.error(e.message)
            return False

        logger.info(f"Bookings saved to {self.path}")
        return True
