"""Headless-browser rendering for pages whose text only exists after JavaScript runs."""

from __future__ import annotations

import asyncio
import logging
import time

from playwright.async_api import Browser, Playwright, Route, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from artlens.web.extract import collapse_whitespace

logger = logging.getLogger(__name__)

BLOCKED_RESOURCE_TYPES = frozenset({"image", "stylesheet", "font", "media"})

# Runs in the page: read text from a clone so the live DOM is left untouched.
_VISIBLE_TEXT_JS = """() => {
    const clone = document.body.cloneNode(true);
    clone.querySelectorAll('script, style, nav, footer, header, iframe, noscript')
        .forEach((el) => el.remove());
    return clone.innerText || clone.textContent || '';
}"""


async def _block_heavy_resources(route: Route) -> None:
    if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


class HeadlessRenderer:
    """One Chromium instance shared by all requests, started on first use.

    Every render gets its own browser context, so cookies and DOM state never
    leak between requests.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        headless: bool = True,
        block_resources: bool = True,
        user_agent: str | None = None,
    ) -> None:
        self._timeout_ms = int(timeout * 1000)
        self._headless = headless
        self._block_resources = block_resources
        self._user_agent = user_agent
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    async def _ensure_browser(self) -> Browser:
        async with self._lock:
            if self._browser is not None and self._browser.is_connected():
                return self._browser
            if self._playwright is not None:
                await self._playwright.stop()
            logger.info("Launching Chromium (headless=%s)", self._headless)
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self._headless,
                args=["--no-sandbox", "--disable-setuid-sandbox"],
            )
            return self._browser

    async def render_text(self, url: str) -> str | None:
        """Visible text of the rendered page, or ``None`` if the page could not be loaded."""
        start = time.monotonic()
        context = None
        try:
            browser = await self._ensure_browser()
            context = await browser.new_context(user_agent=self._user_agent)
            page = await context.new_page()
            if self._block_resources:
                await page.route("**/*", _block_heavy_resources)

            await page.goto(url, wait_until="domcontentloaded", timeout=self._timeout_ms)
            try:
                await page.wait_for_load_state("networkidle", timeout=self._timeout_ms)
            except PlaywrightTimeoutError:
                logger.info("Network never went idle on %s, extracting what loaded", url)

            text = collapse_whitespace(await page.evaluate(_VISIBLE_TEXT_JS) or "")
            logger.info(
                "Rendered %s in %dms: %d chars", url, int((time.monotonic() - start) * 1000), len(text),
            )
            return text
        except Exception:
            logger.exception("Render failed after %dms: %s", int((time.monotonic() - start) * 1000), url)
            return None
        finally:
            if context is not None:
                await context.close()

    async def close(self) -> None:
        async with self._lock:
            if self._browser is not None:
                await self._browser.close()
                self._browser = None
                logger.info("Chromium closed")
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
