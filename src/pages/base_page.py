"""
Base Page Object class implementing core automation patterns.

- Every wait and click carries an explicit timeout
- Playwright timeouts are converted to UiInteractionError
- Screenshot capture on failure
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from playwright.async_api import Page, Locator, Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from config import Config
from src.exceptions import UiInteractionError
from src.utils.logger import get_logger

logger = get_logger("pages")


class BasePage:
    """
    Base class for all Page Objects.

    Provides helper methods for common interactions and handles
    screenshots for debugging.
    """

    def __init__(self, page: Page, screenshots_dir: Optional[Path] = None):
        self.page = page
        self.screenshots_dir = screenshots_dir or Config.SCREENSHOTS_DIR

    async def navigate(self, url: str, timeout: int = Config.NAVIGATION_TIMEOUT):
        """
        Navigate to a URL and wait for the DOM to load.

        Args:
            url: Full URL to navigate to
            timeout: Upper bound in milliseconds
        """
        await self.page.goto(url, wait_until="domcontentloaded", timeout=timeout)

    def locator(self, selector: str) -> Locator:
        """Locate element by CSS selector."""
        return self.page.locator(selector)

    # ============================================================================
    # Common Interactions
    # ============================================================================

    async def click_when_ready(
        self, locator: Locator, description: str = "element", timeout: int = Config.ELEMENT_TIMEOUT
    ):
        """
        Wait for an element to become visible, then click it.

        Args:
            locator: Playwright locator for the element
            description: Human-readable description for logging
            timeout: Upper bound in milliseconds for each of the wait and the click

        Raises:
            UiInteractionError: If the element is not visible or clickable in time
        """
        try:
            await locator.wait_for(state="visible", timeout=timeout)
            await locator.click(timeout=timeout)
            logger.debug(f"Clicked {description}")
        except PlaywrightTimeoutError:
            await self.capture_screenshot(f"click_failed_{description}")
            raise UiInteractionError(
                f"Failed to click {description} - element not found or not clickable",
                details={"timeout_ms": timeout},
            )

    async def fill_input(
        self, locator: Locator, value: str, description: str = "field", timeout: int = Config.ELEMENT_TIMEOUT
    ):
        """
        Fill an input field.

        Raises:
            UiInteractionError: If the input is not editable in time
        """
        try:
            await locator.fill(value, timeout=timeout)
        except PlaywrightTimeoutError:
            await self.capture_screenshot(f"fill_failed_{description}")
            raise UiInteractionError(f"Failed to fill {description} - element not found or not editable")

    async def wait_for_element(
        self,
        locator: Locator,
        state: str = "visible",
        description: str = "element",
        timeout: int = Config.ELEMENT_TIMEOUT,
    ):
        """
        Explicitly wait for an element to reach a specific state.

        Args:
            state: 'visible', 'hidden', 'attached' or 'detached'

        Raises:
            UiInteractionError: On timeout
        """
        try:
            await locator.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError:
            await self.capture_screenshot(f"wait_failed_{description}")
            raise UiInteractionError(f"Timeout waiting for {description} to be {state}")

    async def is_visible(self, locator: Locator) -> bool:
        """
        Check if element is visible right now.

        Returns:
            True if visible, False otherwise (including when the page is gone)
        """
        try:
            return await locator.first.is_visible()
        except PlaywrightError:
            return False

    async def appears_within(self, locator: Locator, timeout: int) -> bool:
        """
        Wait up to timeout ms for an element to show up.

        Returns:
            True if it became visible, False if it did not
        """
        try:
            await locator.first.wait_for(state="visible", timeout=timeout)
            return True
        except PlaywrightTimeoutError:
            return False

    # ============================================================================
    # Debugging
    # ============================================================================

    async def capture_screenshot(self, name: str = "screenshot"):
        """
        Capture a full-page screenshot for debugging.

        Failures are logged, never raised, so they cannot mask the
        original error.

        Args:
            name: Base name for the screenshot file
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        safe_name = "".join(c if c.isalnum() or c in "-_" else "_" for c in name)
        filepath = Path(self.screenshots_dir) / f"{safe_name}_{timestamp}.png"

        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            await self.page.screenshot(path=str(filepath), full_page=True)
            logger.debug(f"Screenshot saved: {filepath}")
        except (PlaywrightError, OSError) as e:
            logger.warning(f"Could not save screenshot {filepath.name}: {e}")
