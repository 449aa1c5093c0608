"""
Session Manager for Wayleadr Parking Bot

Launches a fresh browser and an isolated context for every run.
No cookies or storage survive between runs.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import async_playwright, Browser, BrowserContext, Playwright

from config import Config
from src.pages.wayleadr_page import WayleadrPage
from src.utils.logger import get_logger

logger = get_logger("browser")


class SessionManager:
    """Manages one isolated browser session"""

    def __init__(self, headless: bool = None):
        self.playwright: Playwright = None
        self.browser: Browser = None
        self.context: BrowserContext = None
        # Override Config.HEADLESS if explicitly provided
        self.headless = headless if headless is not None else Config.HEADLESS

    async def initialize(self) -> BrowserContext:
        """
        Launch Chromium and create a new context.

        Returns:
            BrowserContext: Fresh context ready for automation
        """
        self.playwright = await async_playwright().start()

        self.browser = await self.playwright.chromium.launch(
            headless=self.headless,
            args=['--no-sandbox'],
        )

        self.context = await self.browser.new_context(
            viewport={'width': 1280, 'height': 800},
            locale='en-US',
        )

        # Default upper bound for any call that does not pass its own
        self.context.set_default_timeout(Config.TIMEOUT)

        logger.debug(f"Browser session started (headless={self.headless})")
        return self.context

    async def close(self):
        """Clean up browser resources"""
        if self.context:
            await self.context.close()
        if self.browser:
            await self.browser.close()
        if self.playwright:
            await self.playwright.stop()

        logger.debug("Browser session closed")

    async def __aenter__(self) -> BrowserContext:
        """Context manager entry; a half-started browser is shut down again"""
        try:
            return await self.initialize()
        except Exception:
            await self.close()
            raise

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        await self.close()


@asynccontextmanager
async def wayleadr_session(headless: bool = None) -> AsyncIterator[WayleadrPage]:
    """
    Open a fresh browser session and yield a Wayleadr driver for it.

    The browser is closed when the block exits, whether or not the
    booking attempt raised.

    Example:
        async with wayleadr_session(headless=True) as driver:
            await driver.login(credentials)
    """
    async with SessionManager(headless=headless) as context:
        page = await context.new_page()
        yield WayleadrPage(page)
