"""
Browser view that shows a remote site with request filtering installed.
"""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import TYPE_CHECKING

from playwright.async_api import async_playwright

from .adblock.engine import FilterEngine
from .adblock.filter_lists import build_filter_list
from .adblock.interceptor import PlaywrightInterceptor, RequestInterceptor
from .config import WebfenceConfig
from .exceptions import ConfigError

if TYPE_CHECKING:
    from playwright.async_api import Browser, Page, Playwright

logger = logging.getLogger(__name__)


class WrapperView:
    """Chromium page that loads one site through a request interceptor."""

    def __init__(
        self,
        config: WebfenceConfig,
        engine: FilterEngine | None = None,
        interceptor: RequestInterceptor | None = None,
    ) -> None:
        if not config.start_url:
            raise ConfigError("start_url is not set")

        self.config = config
        self.engine = engine or FilterEngine(build_filter_list(config))
        self.interceptor = interceptor or PlaywrightInterceptor(self.engine)
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("View is not open")
        return self._page

    async def open(self) -> Page:
        """Launch the browser, install the interceptor, then load the site."""
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.config.headless)
        page = await self._browser.new_page()

        # Interception must be in place before the first request
        await self.interceptor.install(page)
        self._page = page

        logger.info("Loading %s", self.config.start_url)
        await page.goto(self.config.start_url)
        return page

    async def go_back(self) -> bool:
        """Navigate back in page history.

        Returns:
            False if the page has no history to go back to, so the caller
            can fall back to its default exit behavior.
        """
        before = self.page.url
        response = await self.page.go_back()
        # Same-document navigations return no response but change the URL
        if response is None and self.page.url == before:
            return False
        return True

    async def wait_closed(self) -> None:
        """Wait until the page is closed by the user."""
        if self.page.is_closed():
            return
        closed = asyncio.Event()
        self.page.once("close", lambda _: closed.set())
        await closed.wait()

    async def close(self) -> None:
        """Close the browser and stop Playwright."""
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        self._page = None
        logger.debug("View closed, interceptor stats: %s", self.interceptor.get_stats())

    async def __aenter__(self) -> WrapperView:
        try:
            await self.open()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
