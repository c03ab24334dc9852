"""
Chromium session used to collect accessibility results
"""

from typing import Optional, Dict
import logging

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright
from playwright.async_api import Error as PlaywrightError

from vpat.errors import CheckError

logger = logging.getLogger(__name__)

LOAD_STATES = ('load', 'domcontentloaded', 'networkidle')

MISSING_BROWSER_HINT = "Playwright browsers are not installed. Please run: playwright install chromium"


class BrowserManager:
    """One Chromium browser and context, shared by every checked page"""

    def __init__(self, headless: bool = True, timeout: int = 30000,
                 viewport: Dict[str, int] = None, wait_until: str = "networkidle"):
        """
        Initialize browser manager

        Args:
            headless: Run Chromium without a window
            timeout: Navigation timeout in milliseconds
            viewport: Page size {'width': int, 'height': int}
            wait_until: Load state a page must reach before it is checked
                        ('load', 'domcontentloaded', 'networkidle')
        """
        if wait_until not in LOAD_STATES:
            raise CheckError(f"unknown load state: {wait_until} (use {', '.join(LOAD_STATES)})")
        self.headless = headless
        self.timeout = timeout
        self.viewport = viewport or {'width': 1920, 'height': 1080}
        self.wait_until = wait_until
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def __aenter__(self) -> 'BrowserManager':
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.stop()

    @property
    def running(self) -> bool:
        return self._context is not None

    async def start(self):
        """
        Launch Chromium and open a browsing context

        Raises:
            CheckError: If Chromium is not installed or cannot be launched
        """
        if self.running:
            return
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            # Certificate problems are reported by axe runs, not by navigation
            self._context = await self._browser.new_context(viewport=self.viewport, ignore_https_errors=True)
        except PlaywrightError as e:
            await self.stop()
            message = str(e)
            if "Executable doesn't exist" in message or "playwright install" in message.lower():
                logger.error(MISSING_BROWSER_HINT)
                raise CheckError(MISSING_BROWSER_HINT) from None
            raise CheckError(f"could not start Chromium: {message}") from e

        logger.debug(f"Chromium started (headless={self.headless}, viewport={self.viewport})")

    async def stop(self):
        """Close the context, browser and Playwright driver, in that order"""
        context, browser, driver = self._context, self._browser, self._playwright
        self._context = self._browser = self._playwright = None
        if context:
            await context.close()
        if browser:
            await browser.close()
        if driver:
            await driver.stop()

    async def new_page(self) -> Page:
        """Open a page in the shared context, starting Chromium if needed"""
        await self.start()
        return await self._context.new_page()

    async def navigate(self, page: Page, url: str) -> bool:
        """
        Load a URL and wait for the configured load state

        Args:
            page: Page opened by new_page()
            url: Page to load

        Returns:
            True when the page settled, False when it loaded but never
            reached the load state (it can still be checked)

        Raises:
            CheckError: If the page could not be loaded at all
        """
        try:
            response = await page.goto(url, wait_until="load", timeout=self.timeout)
        except PlaywrightError as e:
            raise CheckError(f"failed to navigate to {url}: {e}", url=url) from e

        if response is not None and response.status >= 400:
            logger.warning(f"{url} answered with HTTP {response.status}")

        if self.wait_until == "load":
            return True
        try:
            await page.wait_for_load_state(self.wait_until, timeout=self.timeout)
        except PlaywrightError as e:
            logger.debug(f"{url} did not reach '{self.wait_until}': {e}")
            return False
        return True
