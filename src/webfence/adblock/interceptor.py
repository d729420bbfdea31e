"""
Request interception for browser pages.

Adapts the synchronous FilterEngine.classify contract to a browser's
request hook: blocked requests are fulfilled with the substitute response,
everything else continues unmodified.
"""

from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .engine import FilterEngine
from .matcher import Blocked

if TYPE_CHECKING:
    from playwright.async_api import Page, Route

logger = logging.getLogger(__name__)


class RequestInterceptor(ABC):
    """Anything that can intercept a page's requests and block or allow them."""

    @abstractmethod
    async def install(self, page: Page) -> None:
        """Start intercepting requests issued by ``page``."""
        ...

    @abstractmethod
    def get_stats(self) -> dict[str, int]: ...


class PlaywrightInterceptor(RequestInterceptor):
    """Routes every request of a Playwright page through a FilterEngine."""

    def __init__(self, engine: FilterEngine) -> None:
        self._engine = engine
        self._pages: weakref.WeakSet[Page] = weakref.WeakSet()

        # Statistics
        self._requests_checked = 0
        self._requests_blocked = 0

    @property
    def engine(self) -> FilterEngine:
        return self._engine

    async def install(self, page: Page) -> None:
        """Install the route handler on a page.

        Must be called before the page loads content. Installing twice on the
        same page is a no-op.
        """
        if page in self._pages:
            return

        await page.route("**/*", self._handle_route)
        self._pages.add(page)
        logger.debug("Request interceptor installed for page")

    async def _handle_route(self, route: Route) -> None:
        """Handle a route (network request).

        Called for every network request the page issues.
        """
        url = route.request.url
        self._requests_checked += 1

        result = self._engine.classify(url)

        if isinstance(result, Blocked):
            self._requests_blocked += 1
            logger.debug("Blocking: %s (%s)", url[:80], ", ".join(sorted(result.fragments)))
            response = result.response
            try:
                await route.fulfill(
                    status=200,
                    content_type=response.content_type_header,
                    body=response.body,
                )
            except Exception as e:
                # Route may already be handled or the page closed
                logger.debug("Failed to fulfill: %s", e)
            return

        try:
            await route.continue_()
        except Exception as e:
            logger.debug("Failed to continue route: %s", e)

    def get_stats(self) -> dict[str, int]:
        """Get blocking statistics."""
        return {
            "requests_checked": self._requests_checked,
            "requests_blocked": self._requests_blocked,
        }
