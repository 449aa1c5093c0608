"""Tests for browser session setup and teardown."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.browser.session_manager import SessionManager, wayleadr_session
from src.pages.wayleadr_page import WayleadrPage


@pytest.fixture
def playwright():
    """Mock Playwright driver with a browser, context and page."""
    page = MagicMock()
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()
    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()
    driver = MagicMock()
    driver.chromium.launch = AsyncMock(return_value=browser)
    driver.stop = AsyncMock()

    starter = MagicMock()
    starter.start = AsyncMock(return_value=driver)
    with patch("src.browser.session_manager.async_playwright", return_value=starter):
        yield driver


@pytest.mark.asyncio
async def test_session_yields_driver_and_closes(playwright):
    async with wayleadr_session(headless=True) as driver:
        assert isinstance(driver, WayleadrPage)
        playwright.chromium.launch.assert_awaited_once()
        assert playwright.chromium.launch.await_args.kwargs["headless"] is True

    browser = playwright.chromium.launch.return_value
    browser.new_context.return_value.close.assert_awaited_once()
    browser.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()


@pytest.mark.asyncio
async def test_session_closes_when_block_raises(playwright):
    with pytest.raises(RuntimeError):
        async with wayleadr_session(headless=True):
            raise RuntimeError("attempt blew up")

    playwright.chromium.launch.return_value.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()


@pytest.mark.asyncio
async def test_failed_launch_stops_playwright(playwright):
    playwright.chromium.launch.side_effect = RuntimeError("chromium failed to launch")

    with pytest.raises(RuntimeError, match="chromium failed to launch"):
        async with SessionManager(headless=True):
            pass

    playwright.stop.assert_awaited_once()
