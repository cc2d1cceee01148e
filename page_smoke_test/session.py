"""Browser session bootstrap."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from playwright.async_api import Browser, BrowserContext, Page, async_playwright

from page_smoke_test.models.config import RunConfiguration

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class BrowserSession:
    """One browser, one isolated context and the single page used by a run."""

    browser: Browser = field(repr=False)
    context: BrowserContext = field(repr=False)
    page: Page = field(repr=False)


@asynccontextmanager
async def open_browser_session(
    config: RunConfiguration,
) -> AsyncGenerator[BrowserSession, None]:
    """Launch Chromium with certificate errors ignored and yield its page.

    The browser is closed exactly once when the context exits, whatever the
    exit path. Launch failures propagate to the caller.
    """
    async with async_playwright() as playwright:
        log.info("Launching browser (headless=%s)...", config.headless)
        browser = await playwright.chromium.launch(headless=config.headless)
        try:
            # Test deployments use self-signed certificates
            context = await browser.new_context(ignore_https_errors=True)
            page = await context.new_page()
            yield BrowserSession(browser=browser, context=context, page=page)
        finally:
            log.info("Closing browser")
            await browser.close()
