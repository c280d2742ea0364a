# ovrstat/scraper/session.py
"""
Headless browser document fetching with Playwright.

Used instead of the plain HTTP client when the career pages are served
behind bot protection that only a real browser gets past.

Each fetch launches its own Chromium and closes it before returning. The
sync Playwright objects belong to the thread that started them, so nothing
browser-related is kept on the fetcher between calls.
"""

from __future__ import annotations

import logging
from typing import Optional

from ovrstat.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class BrowserSession:
    """Playwright driver, browser, context and page for a single fetch."""

    def __init__(self, playwright=None, browser=None, context=None, page=None):
        self.playwright = playwright
        self.browser = browser
        self.context = context
        self.page = page

    def close(self) -> None:
        """Clean up browser resources."""
        for resource in (self.context, self.browser):
            if resource is None:
                continue
            try:
                resource.close()
            except Exception as exc:
                logger.debug("Ignoring error while closing browser resource: %s", exc)
        if self.playwright is not None:
            try:
                self.playwright.stop()
            except Exception as exc:
                logger.debug("Ignoring error while stopping Playwright: %s", exc)

        self.playwright = None
        self.browser = None
        self.context = None
        self.page = None


class BrowserDocumentFetcher:
    """Fetch rendered career pages through Chromium."""

    USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    VIEWPORT = {"width": 1280, "height": 720}

    def __init__(self, headless: bool = True, timeout_ms: int = 20000, settle_ms: int = 1000):
        self.headless = headless
        self.timeout_ms = timeout_ms
        self.settle_ms = settle_ms

    def fetch_document(self, url: str) -> str:
        """
        Load `url` and return the rendered HTML.

        Raises:
            UpstreamUnavailableError: Navigation failed, timed out or returned an error status
        """
        session = self._launch_browser()
        try:
            return self._load(session.page, url)
        finally:
            session.close()

    def _load(self, page, url: str) -> str:
        try:
            response = page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
            if self.settle_ms:
                page.wait_for_timeout(self.settle_ms)
            status: Optional[int] = response.status if response is not None else None
            html = page.content()
        except Exception as exc:
            raise UpstreamUnavailableError(f"Browser failed to load {url}: {exc}") from exc

        if status is not None and status >= 500:
            raise UpstreamUnavailableError(f"GET {url} returned HTTP {status}")
        return html

    def _launch_browser(self) -> BrowserSession:
        """Start Playwright and open a fresh page."""
        try:
            from playwright.sync_api import sync_playwright
        except ImportError as exc:
            raise ImportError(
                "Playwright is not installed. Install with: pip install playwright; playwright install chromium"
            ) from exc

        logger.info("Launching Chromium (headless=%s)", self.headless)
        session = BrowserSession()
        try:
            session.playwright = sync_playwright().start()
            session.browser = session.playwright.chromium.launch(headless=self.headless)
            session.context = session.browser.new_context(
                user_agent=self.USER_AGENT,
                viewport=self.VIEWPORT,
                locale="en-US",
            )
            session.page = session.context.new_page()
        except Exception as exc:
            session.close()
            raise UpstreamUnavailableError(f"Failed to launch browser: {exc}") from exc
        return session
