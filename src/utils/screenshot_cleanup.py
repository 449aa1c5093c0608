"""
Screenshot Cleanup Utility

Failure screenshots pile up on daily runs; keep only the most recent runs.
"""

import re
from pathlib import Path
from typing import Dict, List

from src.utils.logger import get_logger

logger = get_logger("cleanup")

# e.g. login_failed_20250309_043012.png
TIMESTAMP_PATTERN = re.compile(r'(\d{8})_\d{6}\.png$')


def cleanup_old_screenshots(screenshots_dir: Path, keep_days: int = 5) -> int:
    """
    Delete screenshots from all but the most recent days with screenshots.

    Files without a timestamp in their name are left alone.

    Args:
        screenshots_dir: Directory containing screenshots
        keep_days: Number of distinct recent days to keep

    Returns:
        Number of files deleted
    """
    screenshots_dir = Path(screenshots_dir)
    if not screenshots_dir.exists():
        return 0

    by_day: Dict[str, List[Path]] = {}
    for file in screenshots_dir.glob("*.png"):
        match = TIMESTAMP_PATTERN.search(file.name)
        if match:
            by_day.setdefault(match.group(1), []).append(file)

    days_to_delete = sorted(by_day, reverse=True)[keep_days:]

    deleted = 0
    for day in days_to_delete:
        for file in by_day[day]:
            try:
                file.unlink()
                deleted += 1
            except OSError as e:
                logger.warning(f"Failed to delete {file.name}: {e}")

    if deleted:
        logger.info(f"Deleted {deleted} old screenshot(s) from {len(days_to_delete)} day(s)")
    return deleted
