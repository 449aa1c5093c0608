"""
Daily Parking Booking Runner

Reads bookings.json and requests tomorrow's parking space if a pending
booking is due today. Meant to run once a day from a scheduler.

Usage:
    python parking_book.py              # Uses HEADLESS from the environment
    python parking_book.py --headless   # Force a headless browser

Exit code is 0 when the space was booked or nothing was due, 1 otherwise.
"""

import asyncio
import sys
from dataclasses import replace

from config import BookingSettings, Config
from src.exceptions import ConfigurationError
from src.utils.file_logger import setup_file_logger
from src.utils.logger import ErrorTracker, setup_logger, set_error_tracker
from src.utils.pretty_output import PrettyOutput
from src.utils.screenshot_cleanup import cleanup_old_screenshots
from src.workflows.parking_booking import ParkingBookingWorkflow


async def main(argv=None) -> int:
    """
    Run the daily booking.

    Returns:
        Process exit code
    """
    argv = sys.argv[1:] if argv is None else argv

    logger = setup_logger()
    Config.ensure_directories()
    setup_file_logger(
        logs_dir=Config.LOGS_DIR,
        max_bytes=Config.MAX_BOOKING_LOG_SIZE_MB * 1024 * 1024,
        backup_count=Config.LOG_BACKUP_COUNT,
    )
    set_error_tracker(ErrorTracker(Config.LOGS_DIR / "errors"))

    try:
        settings = BookingSettings.from_env()
    except ConfigurationError as e:
        logger.error(f"{e.message}: {', '.join(e.details.get('missing', []))}")
        PrettyOutput.error("Credentials not set. Define WAYLEADR_USERNAME and WAYLEADR_PASSWORD.")
        return 1

    if "--headless" in argv:
        settings = replace(settings, headless=True)

    cleanup_old_screenshots(Config.SCREENSHOTS_DIR, keep_days=Config.KEEP_SCREENSHOT_DAYS)

    PrettyOutput.header("Wayleadr Parking Booking")
    result = await ParkingBookingWorkflow(settings).run()

    if not result.attempted:
        PrettyOutput.info("No pending booking for today.")
    else:
        PrettyOutput.booking_result(result.parking_date, result.status, result.message)
        if not result.saved:
            PrettyOutput.warning(f"Could not save {settings.bookings_file}")

    return result.exit_code


if __name__ == "__main__":
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        exit_code = 130
    except Exception as e:
        setup_logger().exception(f"Unhandled error in parking booking: {e}")
        exit_code = 1
    sys.exit(exit_code)
