"""DuckDuckGo search through Playwright browser automation."""

import asyncio
from typing import Any

from playwright.async_api import Browser, BrowserContext, ElementHandle, Page, Playwright, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ddg_web_search.logging import AsyncTimer, get_logger
from ddg_web_search.models import SearchResult
from ddg_web_search.searcher.selectors import (
    CAPTCHA_SELECTOR,
    EXTRACT_RESULTS_SCRIPT,
    GENERIC_CONTAINER_SELECTORS,
    RESULT_CONTAINER_SELECTORS,
    SEARCH_INPUT_SELECTORS,
    SEARCH_ORIGIN,
    SNIPPET_SELECTORS,
    SUBMIT_SELECTORS,
    TITLE_SELECTORS,
    parse_result_groups,
)
from ddg_web_search.utils.rate_limiter import RateLimiter

logger = get_logger("ddg_web_search.searcher")

RATE_LIMIT_REQUESTS = 1
RATE_LIMIT_INTERVAL_MS = 2000
NAVIGATION_TIMEOUT_MS = 30000
SELECTOR_WAIT_TIMEOUT_MS = 5000
CAPTCHA_MANUAL_SOLVE_TIMEOUT_MS = 60000

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)
VIEWPORT = {"width": 1366, "height": 768}
BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-blink-features=AutomationControlled",
    "--disable-features=VizDisplayCompositor",
]


class BrowserInitError(Exception):
    """Raised when the browser cannot be launched."""

    pass


class WebSearcher:
    """Search DuckDuckGo with a real browser.

    One Chromium instance is launched lazily and shared by every search made
    through this object; each search gets its own context and page. Searches
    never raise: any failure is logged and yields an empty list.

    Call ``close()`` (or use ``async with``) when done to stop the browser.
    """

    def __init__(
        self,
        headless: bool = True,
        rate_limit: int = RATE_LIMIT_REQUESTS,
        rate_limit_interval_ms: int = RATE_LIMIT_INTERVAL_MS,
        base_url: str = SEARCH_ORIGIN,
    ):
        """Initialize the searcher.

        Args:
            headless: Run the browser without a window
            rate_limit: Searches allowed per interval
            rate_limit_interval_ms: Interval length in milliseconds
            base_url: Search engine origin
        """
        self.headless = headless
        self.base_url = base_url
        self.rate_limiter = RateLimiter(rate_limit, rate_limit_interval_ms)
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._browser_lock = asyncio.Lock()

    async def search(self, query: str) -> list[SearchResult]:
        """Search the web for a query.

        Args:
            query: Search query

        Returns:
            list[SearchResult]: Results in page order, empty on any failure
        """
        if not query or not query.strip():
            return []

        await self.rate_limiter.acquire()

        context: BrowserContext | None = None
        page: Page | None = None
        try:
            async with AsyncTimer("search", logger, query=query):
                browser = await self._ensure_browser()

                context = await browser.new_context(user_agent=USER_AGENT, viewport=VIEWPORT)
                page = await context.new_page()

                await page.goto(
                    self.base_url,
                    wait_until="networkidle",
                    timeout=NAVIGATION_TIMEOUT_MS,
                )

                if not await self._handle_captcha(page):
                    return []

                await self._submit_query(page, query)
                await self._wait_for_results(page)
                results = await self._extract_results(page)

            logger.info("Search finished", query=query, results=len(results))
            return results

        except Exception as e:
            self._log_search_error(query, e)
            return []

        finally:
            await self._close_page(page, context)

    async def close(self) -> None:
        """Close the shared browser. Safe to call more than once."""
        async with self._browser_lock:
            if self._browser is not None:
                try:
                    await self._browser.close()
                except Exception as e:
                    logger.error("Error closing browser", error=str(e))
                self._browser = None

            if self._playwright is not None:
                try:
                    await self._playwright.stop()
                except Exception as e:
                    logger.warning("Error stopping Playwright", error=str(e))
                self._playwright = None

    async def __aenter__(self) -> "WebSearcher":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _ensure_browser(self) -> Browser:
        # Concurrent first searches wait on the lock and reuse one launch
        async with self._browser_lock:
            if self._browser is None:
                self._browser = await self._launch_browser()

        if self._browser is None:
            raise BrowserInitError("Failed to initialize browser")
        return self._browser

    async def _launch_browser(self) -> Browser | None:
        logger.debug("Launching Chromium", headless=self.headless)
        self._playwright = await async_playwright().start()
        try:
            return await self._playwright.chromium.launch(
                headless=self.headless,
                args=BROWSER_ARGS,
            )
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

    async def _handle_captcha(self, page: Page) -> bool:
        """Return False when a captcha blocks the search."""
        if await page.query_selector(CAPTCHA_SELECTOR) is None:
            return True

        logger.warning("Captcha detected. You may need to solve it manually.")
        if self.headless:
            return False

        logger.warning(
            "Waiting for manual captcha solving",
            timeout_s=CAPTCHA_MANUAL_SOLVE_TIMEOUT_MS // 1000,
        )
        try:
            await page.wait_for_selector(
                CAPTCHA_SELECTOR,
                state="hidden",
                timeout=CAPTCHA_MANUAL_SOLVE_TIMEOUT_MS,
            )
            logger.info("Captcha solved, continuing")
        except PlaywrightTimeoutError:
            logger.warning("Captcha wait timeout - proceeding anyway")
        return True

    async def _submit_query(self, page: Page, query: str) -> None:
        await page.wait_for_selector(
            ", ".join(SEARCH_INPUT_SELECTORS),
            timeout=SELECTOR_WAIT_TIMEOUT_MS,
        )
        search_box = await _first_match(page, SEARCH_INPUT_SELECTORS)
        if search_box is None:
            raise RuntimeError("Search box not found")
        await search_box.type(query)

        submit = await _first_match(page, SUBMIT_SELECTORS)
        async with page.expect_navigation(
            wait_until="networkidle",
            timeout=NAVIGATION_TIMEOUT_MS,
        ):
            if submit is not None:
                await submit.click()
            else:
                await search_box.press("Enter")

    async def _wait_for_results(self, page: Page) -> None:
        for selector in RESULT_CONTAINER_SELECTORS:
            try:
                await page.wait_for_selector(selector, timeout=SELECTOR_WAIT_TIMEOUT_MS)
            except PlaywrightTimeoutError:
                logger.debug("Result selector not found, trying next", selector=selector)
                continue
            logger.debug("Found results", selector=selector)
            return

        logger.warning("No search result selectors found, attempting to extract from page anyway")

    async def _extract_results(self, page: Page) -> list[SearchResult]:
        groups = await page.evaluate(
            EXTRACT_RESULTS_SCRIPT,
            {
                "containers": [*RESULT_CONTAINER_SELECTORS, *GENERIC_CONTAINER_SELECTORS],
                "titles": list(TITLE_SELECTORS),
                "snippets": list(SNIPPET_SELECTORS),
            },
        )
        return parse_result_groups(groups or [], self.base_url)

    @staticmethod
    async def _close_page(page: Page | None, context: BrowserContext | None) -> None:
        if page is not None:
            try:
                await page.close()
            except Exception as e:
                logger.error("Error closing page", error=str(e))
        if context is not None:
            try:
                await context.close()
            except Exception as e:
                logger.error("Error closing browser context", error=str(e))

    @staticmethod
    def _log_search_error(query: str, error: Exception) -> None:
        message = str(error)
        logger.error(
            "Error during web search",
            query=query,
            error=message,
            error_type=type(error).__name__,
        )

        if isinstance(error, PlaywrightTimeoutError) or "Timeout" in message or "timeout" in message:
            logger.error("Search timed out - the page took too long to load")
        elif "Target closed" in message or "has been closed" in message:
            logger.error("Browser was closed unexpectedly")
        elif "Protocol error" in message:
            logger.error("Browser connection error occurred")


async def _first_match(page: Page, selectors: tuple[str, ...]) -> ElementHandle | None:
    for selector in selectors:
        handle = await page.query_selector(selector)
        if handle is not None:
            return handle
    return None
