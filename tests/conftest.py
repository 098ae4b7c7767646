"""Test configuration and fixtures."""

from contextlib import asynccontextmanager

import pytest

from app.services.button_clicker import ClickOutcome
from config import Settings


class FakePage:
    """Records page calls; failures are injected per operation name."""

    def __init__(self, fail_on=(), screenshot_bytes=b"\x89PNG fake"):
        self.fail_on = set(fail_on)
        self.screenshot_bytes = screenshot_bytes
        self.calls = []

    async def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail_on:
            raise RuntimeError(f"{name} failed")

    async def goto(self, url):
        await self._record("goto", url)

    async def wait_visible(self, selector):
        await self._record("wait_visible", selector)

    async def click(self, selector):
        await self._record("click", selector)

    async def pause(self, seconds):
        await self._record("pause", seconds)

    async def screenshot(self):
        await self._record("screenshot")
        return self.screenshot_bytes


class FakeDriver:
    def __init__(self, page=None):
        self.page = page or FakePage()
        self.opened = []
        self.closed = 0

    @asynccontextmanager
    async def session(self, ws_url):
        self.opened.append(ws_url)
        try:
            yield self.page
        finally:
            self.closed += 1


class FakeResolver:
    def __init__(self, ws_url="ws://localhost:9222/devtools/browser/abc", error=None):
        self.ws_url = ws_url
        self.error = error
        self.calls = 0

    def resolve(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.ws_url


class RecordingClicker:
    def __init__(self, outcome=ClickOutcome.CLICKED):
        self.outcome = outcome
        self.urls = []

    async def click(self, page_url):
        self.urls.append(page_url)
        return self.outcome


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Development-mode settings with fast timeouts."""
    return Settings(
        click_timeout_seconds=0.5,
        fallback_delay_seconds=0,
        screenshot_path=str(tmp_path / "failedbuttonclick.png"),
    )


@pytest.fixture
def prod_settings(tmp_path) -> Settings:
    return Settings(
        app_mode="prod",
        slack_signing_secret="test-signing-secret",
        click_timeout_seconds=0.5,
        fallback_delay_seconds=0,
        screenshot_path=str(tmp_path / "failedbuttonclick.png"),
    )


@pytest.fixture
def clicker() -> RecordingClicker:
    return RecordingClicker()
