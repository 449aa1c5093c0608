"""
Wayleadr Page Object

Drives the Wayleadr web portal through a single parking request:
sign in, open the request form, pick the date, fall back to the paid
zone when the shared zone is full, submit and read the result banner.
"""

import asyncio
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from playwright.async_api import Page, Locator, Error as PlaywrightError

from config import Config
from src.exceptions import AuthenticationError, SiteTimeoutError, UiInteractionError
from src.interfaces.site_driver import OUTCOME_PRECEDENCE, SiteDriver, SubmissionOutcome, classify_outcome
from src.pages.base_page import BasePage
from src.utils.date_calculator import get_day
from src.utils.logger import get_logger

logger = get_logger("wayleadr")

REQUEST_FORM_URL = re.compile(r"/request/new")

# The datepicker only shows one month; tomorrow can be in the next one
MAX_MONTH_PAGES = 2


class WayleadrPage(BasePage, SiteDriver):
    """
    Page Object and site driver for the Wayleadr request form.
    """

    def __init__(self, page: Page, screenshots_dir: Optional[Path] = None):
        BasePage.__init__(self, page, screenshots_dir)
        SiteDriver.__init__(self)

    # ============================================================================
    # Selectors
    # ============================================================================

    @property
    def email_input(self) -> Locator:
        return self.locator("#user_email")

    @property
    def password_input(self) -> Locator:
        return self.locator("#user_password")

    @property
    def sign_in_button(self) -> Locator:
        return self.locator('input[type="submit"][value="Sign In"], button:has-text("Sign In")').first

    @property
    def sign_in_alert(self) -> Locator:
        return self.locator('div.alert-danger, div.alert, p.alert')

    @property
    def book_space_button(self) -> Locator:
        return self.locator('a.btn.btn-primary:has-text("Book Space")').first

    @property
    def post_login_indicator(self) -> Locator:
        return self.locator('p:has-text("You may select multiple dates")').first

    @property
    def date_input(self) -> Locator:
        return self.locator("input#booking_request_date_range.hasDatepicker")

    @property
    def calendar_container(self) -> Locator:
        return self.locator("div#ui-datepicker-div")

    @property
    def next_month_button(self) -> Locator:
        return self.calendar_container.locator("a.ui-datepicker-next")

    def day_cell(self, date: datetime) -> Locator:
        """Selectable cell for a date; jQuery UI months are zero-based."""
        return self.calendar_container.locator(
            f'td[data-month="{date.month - 1}"][data-year="{date.year}"]'
            f':not(.ui-datepicker-unselectable):not(.ui-state-disabled) '
            f'a.ui-state-default[data-date="{get_day(date)}"]'
        )

    @property
    def zone_select(self) -> Locator:
        return self.locator('select#booking_request_zone_id, select[name="booking_request[zone_id]"]').first

    @property
    def no_spaces_message(self) -> Locator:
        return self.locator(
            'div:text-matches("There are no available spaces", "i"), '
            'p:text-matches("There are no available spaces", "i")'
        )

    @property
    def submit_button(self) -> Locator:
        return self.locator('input#form-submit-button[value="Request Space"]')

    @property
    def success_alert(self) -> Locator:
        return self.locator(
            'div.alert-success, div:has-text("Booking successful"), div:has-text("Request submitted")'
        )

    @property
    def error_alert(self) -> Locator:
        return self.locator('div.alert-danger, div.alert-error')

    def outcome_indicators(self) -> Dict[SubmissionOutcome, Locator]:
        return {
            SubmissionOutcome.BOOKED: self.success_alert,
            SubmissionOutcome.NO_SPACE: self.no_spaces_message,
            SubmissionOutcome.FAILED: self.error_alert,
        }

    # ============================================================================
    # Login
    # ============================================================================

    async def _login(self, credentials) -> None:
        try:
            await self.navigate(Config.sign_in_url())
            await self.email_input.wait_for(state="visible", timeout=Config.LOGIN_TIMEOUT)
            await self.fill_input(self.email_input, credentials.username, "email")
            await self.fill_input(self.password_input, credentials.password, "password")
            async with self.page.expect_navigation(
                wait_until="domcontentloaded", timeout=Config.LOGIN_TIMEOUT
            ):
                await self.sign_in_button.click(timeout=Config.SUBMIT_TIMEOUT)
        except (UiInteractionError, PlaywrightError) as e:
            await self.capture_screenshot("login_failed")
            raise AuthenticationError(f"Could not sign in: {e}")

        if Config.SIGN_IN_PATH in self.page.url:
            alert = ""
            if await self.is_visible(self.sign_in_alert):
                alert = (await self.sign_in_alert.first.text_content() or "").strip()
            await self.capture_screenshot("login_rejected")
            raise AuthenticationError(
                "Sign-in was rejected" + (f": {alert}" if alert else ""),
                details={"url": self.page.url},
            )

        # Login lands on the dashboard; the request form is one click further
        try:
            if not REQUEST_FORM_URL.search(self.page.url):
                await self.click_when_ready(self.book_space_button, "Book Space button")
                await self.page.wait_for_url(REQUEST_FORM_URL, timeout=Config.LOGIN_TIMEOUT)
            await self.post_login_indicator.wait_for(state="visible", timeout=Config.LOGIN_TIMEOUT)
        except (UiInteractionError, PlaywrightError) as e:
            await self.capture_screenshot("booking_form_not_reached")
            raise AuthenticationError(f"Booking form not reached after login: {e}")

        logger.info("Logged in and on the booking form")

    # ============================================================================
    # Date selection
    # ============================================================================

    async def _select_date(self, date: datetime) -> None:
        await self.click_when_ready(self.date_input, "date input")
        await self.wait_for_element(self.calendar_container, "visible", "calendar")

        cell = self.day_cell(date)
        for _ in range(MAX_MONTH_PAGES):
            if await cell.count() > 0:
                break
            try:
                await self.next_month_button.click(timeout=Config.ELEMENT_TIMEOUT)
            except PlaywrightError as e:
                raise UiInteractionError(f"Could not page the calendar forward: {e}")
        await self.click_when_ready(cell, f"day {get_day(date)}")

        await self._dismiss_calendar()
        logger.info(f"Selected {date:%d-%m-%Y} in the calendar")

    async def _dismiss_calendar(self):
        """Close the datepicker overlay so it does not cover the form."""
        try:
            if await self.calendar_container.is_visible():
                await self.page.keyboard.press("Escape")
                await self.page.mouse.click(5, 5)
        except PlaywrightError as e:
            raise UiInteractionError(f"Could not dismiss the calendar: {e}")
        await self.wait_for_element(self.calendar_container, "hidden", "calendar to close")

    # ============================================================================
    # Zone fallback
    # ============================================================================

    async def _resolve_zone_availability(self) -> str:
        if not await self.appears_within(self.no_spaces_message, Config.NO_SPACE_CHECK_TIMEOUT):
            return Config.DEFAULT_ZONE

        logger.info(f"No spaces in the {Config.DEFAULT_ZONE} zone, trying {Config.FALLBACK_ZONE}")
        try:
            await self.zone_select.select_option(label=Config.FALLBACK_ZONE, timeout=Config.ELEMENT_TIMEOUT)
        except PlaywrightError as e:
            logger.warning(f"Could not switch to the {Config.FALLBACK_ZONE} zone: {e}")
            return Config.DEFAULT_ZONE

        try:
            await self.no_spaces_message.first.wait_for(
                state="hidden", timeout=Config.NO_SPACE_CHECK_TIMEOUT
            )
        except PlaywrightError:
            logger.info(f"The {Config.FALLBACK_ZONE} zone reports no spaces as well")
        return Config.FALLBACK_ZONE

    # ============================================================================
    # Submission
    # ============================================================================

    async def _submit(self) -> SubmissionOutcome:
        if await self.is_visible(self.no_spaces_message):
            logger.info("No spaces available, not submitting")
            return SubmissionOutcome.NO_SPACE

        await self.click_when_ready(self.submit_button, "Request Space button", timeout=Config.SUBMIT_TIMEOUT)

        indicators = self.outcome_indicators()
        try:
            first = await self._wait_for_first_indicator(indicators, Config.OUTCOME_TIMEOUT)
        except PlaywrightError as e:
            raise UiInteractionError(f"Lost the page while waiting for the result: {e}")

        if first is None:
            await self.capture_screenshot("outcome_timeout")
            raise SiteTimeoutError(timeout=Config.OUTCOME_TIMEOUT)

        visible = [
            outcome for outcome in OUTCOME_PRECEDENCE
            if await self.is_visible(indicators[outcome])
        ]
        outcome = classify_outcome(visible)
        if len(visible) != 1:
            await self.capture_screenshot("outcome_ambiguous")
            logger.warning(
                f"Ambiguous result ({', '.join(o.value for o in visible) or 'nothing visible'}), "
                f"treating as {outcome.value}"
            )
        else:
            logger.info(f"Portal reported: {outcome.value}")
        return outcome

    async def _wait_for_first_indicator(
        self, indicators: Dict[SubmissionOutcome, Locator], timeout: int
    ) -> Optional[SubmissionOutcome]:
        """
        Wait for whichever indicator becomes visible first.

        Returns:
            The outcome whose indicator appeared, or None if none did in time
        """
        waits = {
            asyncio.ensure_future(self.appears_within(locator, timeout)): outcome
            for outcome, locator in indicators.items()
        }
        pending = set(waits)
        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    if task.result():
                        return waits[task]
            return None
        finally:
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
