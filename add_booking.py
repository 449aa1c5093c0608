"""
Add Booking CLI

Queues a parking date for the daily runner.

Usage:
    python add_booking.py --add 31-12-2025   # Add (or re-queue) a date
    python add_booking.py 31-12-2025         # Same as --add
    python add_booking.py --list             # Show the ledger
"""

import sys

from config import Config
from src.ledger.ledger_store import LedgerStore
from src.utils.logger import setup_logger
from src.utils.pretty_output import PrettyOutput, print_ledger
from src.workflows.add_booking import AddAction, add_booking_entry


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logger = setup_logger()
    store = LedgerStore(Config.BOOKINGS_FILE)

    if "--list" in argv:
        print_ledger(store.load())
        return 0

    if "--add" in argv:
        index = argv.index("--add")
        date_str = argv[index + 1] if index + 1 < len(argv) else None
    elif len(argv) == 1 and not argv[0].startswith("-"):
        date_str = argv[0]
    else:
        date_str = None

    if not date_str:
        logger.error("Invalid arguments.")
        print(__doc__)
        return 1

    result = add_booking_entry(date_str, store)

    if result.action == AddAction.INVALID:
        PrettyOutput.error(result.message)
    elif result.action == AddAction.UNCHANGED:
        PrettyOutput.warning(f"Booking for {result.parking_date} left unchanged ({result.message})")
    elif not result.saved:
        PrettyOutput.error(f"Could not save {store.path}")
    elif result.action == AddAction.RESET:
        PrettyOutput.success(f"Booking for {result.parking_date} reset to pending")
    else:
        PrettyOutput.success(f"Added booking for {result.parking_date}")

    return result.exit_code


if __name__ == "__main__":
    try:
        exit_code = main()
    except Exception as e:
        setup_logger().exception(f"Unhandled error in add-booking CLI: {e}")
        exit_code = 1
    sys.exit(exit_code)
