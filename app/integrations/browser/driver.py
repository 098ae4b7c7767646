# Playwright session over the Chrome DevTools Protocol

import asyncio
import logging # Import logging
from contextlib import asynccontextmanager

from playwright.async_api import async_playwright

# Get a logger instance for this module
logger = logging.getLogger(__name__)


class BrowserPage:
    """The handful of page operations the button clicker needs."""

    def __init__(self, page):
        self._page = page

    async def goto(self, url: str):
        await self._page.goto(url)

    async def wait_visible(self, selector: str):
        await self._page.locator(selector).first.wait_for(state="visible")

    async def click(self, selector: str):
        # Playwright only clicks once the element is visible, enabled and stable.
        await self._page.locator(selector).first.click()

    async def pause(self, seconds: float):
        await asyncio.sleep(seconds)

    async def screenshot(self) -> bytes:
        return await self._page.screenshot(full_page=True, type="png")


class PlaywrightDriver:
    """Attaches to an already running Chrome through its WebSocket debugger URL."""

    @asynccontextmanager
    async def session(self, ws_url: str):
        async with async_playwright() as p:
            browser = await p.chromium.connect_over_cdp(ws_url)
            try:
                # The default context carries the signed-in Slack session.
                if browser.contexts:
                    context, owns_context = browser.contexts[0], False
                else:
                    context, owns_context = await browser.new_context(), True
                try:
                    page = await context.new_page()
                    try:
                        yield BrowserPage(page)
                    finally:
                        await page.close()
                finally:
                    if owns_context:
                        await context.close()
            finally:
                # Disconnects only; the remote Chrome keeps running.
                await browser.close()
                logger.debug(f"Closed browser session {ws_url}")
