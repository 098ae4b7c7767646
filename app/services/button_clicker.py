# Clicks the wild button in the Slack web client, screenshotting the page on failure

import asyncio
import enum
import os
import tempfile
import threading
import logging # Import logging

# Get a logger instance for this module
logger = logging.getLogger(__name__)

from app.integrations.browser.discovery import (
    BrowserDiscoveryError,
    DebugEndpointResolver,
    terminate_process,
)
from app.integrations.browser.driver import PlaywrightDriver

# Concurrent failures share one screenshot path.
_screenshot_lock = threading.Lock()


class ClickOutcome(enum.Enum):
    CLICKED = "clicked"
    SCREENSHOT_SAVED = "screenshot_saved"
    FAILED = "failed"


def write_screenshot(path: str, data: bytes):
    """Replaces the file at path with data, one whole file at a time."""
    directory = os.path.dirname(os.path.abspath(path))
    with _screenshot_lock:
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class ButtonClicker:
    """Runs one click attempt per call against a fresh browser session.

    Errors never propagate to the caller: automation failures fall back to a
    screenshot, and fallback failures are only logged. The one exception is
    browser discovery, whose failure is handed to on_fatal.
    """

    def __init__(self, settings, resolver=None, driver=None, on_fatal=terminate_process):
        self.settings = settings
        self.resolver = resolver or DebugEndpointResolver(
            settings.debug_endpoint_url, timeout=settings.discovery_timeout_seconds
        )
        self.driver = driver or PlaywrightDriver()
        self.on_fatal = on_fatal

    async def click(self, page_url: str) -> ClickOutcome:
        selector = self.settings.button_selector
        try:
            ws_url = await asyncio.to_thread(self.resolver.resolve)
        except BrowserDiscoveryError as e:
            self.on_fatal(e)
            return ClickOutcome.FAILED

        try:
            async with self.driver.session(ws_url) as page:
                try:
                    await asyncio.wait_for(
                        self._click_button(page, page_url, selector),
                        timeout=self.settings.click_timeout_seconds,
                    )
                except Exception as e:
                    logger.error(f"Failed to click button: {e!r}")
                    return await self._save_screenshot(page, page_url)

                logger.info("Clicked wild button!")
                return ClickOutcome.CLICKED
        except Exception as e:
            logger.error(f"Browser session for {page_url} failed: {e!r}")
            return ClickOutcome.FAILED

    async def _click_button(self, page, page_url: str, selector: str):
        await page.goto(page_url)
        # wait for button element to be visible (ie, page is loaded)
        await page.wait_visible(selector)
        await page.click(selector)

    async def _save_screenshot(self, page, page_url: str) -> ClickOutcome:
        path = self.settings.screenshot_path
        try:
            await page.goto(page_url)
            # TODO: replace the fixed delay with a bounded wait for the message list
            await page.pause(self.settings.fallback_delay_seconds)
            data = await page.screenshot()
        except Exception as e:
            logger.error(f"Failed to take screenshot: {e!r}")
            return ClickOutcome.FAILED

        try:
            await asyncio.to_thread(write_screenshot, path, data)
        except OSError as e:
            logger.error(f"Failed to save screenshot: {e}")
            return ClickOutcome.FAILED

        logger.info(f"Screenshot saved successfully to {path}")
        return ClickOutcome.SCREENSHOT_SAVED
