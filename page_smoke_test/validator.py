"""Per-page validation: navigation, status, content readiness, response errors."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from playwright.async_api import Page, Response
from yarl import URL

from page_smoke_test.interstitial import InterstitialHandler
from page_smoke_test.models.config import Timeouts
from page_smoke_test.models.result import PageOutcome

log = logging.getLogger(__name__)

type SelectorState = Literal["attached", "detached", "hidden", "visible"]

# Pages render their lists differently; any one of these means content is ready.
READINESS_PROBES: Sequence[tuple[str, SelectorState]] = (
    ("table", "visible"),
    (".grid", "visible"),
    (".loading", "hidden"),
)


class ReadinessTimeoutError(Exception):
    """Raised when no readiness signal settles within the timeout."""


def is_same_host(response_url: str, target_url: str) -> bool:
    """Check whether a response comes from the application under test."""
    return URL(response_url).host == URL(target_url).host


def format_http_error(status: int, url: str) -> str:
    """Format an HTTP error the way it appears in the report."""
    return f"HTTP {status} on {url}"


async def wait_for_content(page: Page, timeout: float) -> str:
    """Race the readiness probes and return the selector that won.

    The first probe to settle decides the race: if it succeeded its selector
    is returned, if it failed its exception is raised. Probes still pending
    are cancelled.

    Args:
        page: Page to probe
        timeout: Shared timeout in milliseconds

    Raises:
        ReadinessTimeoutError: If no probe settles within the timeout

    """
    probes = {
        asyncio.create_task(
            page.wait_for_selector(selector, state=state, timeout=timeout)
        ): selector
        for selector, state in READINESS_PROBES
    }
    try:
        done, _ = await asyncio.wait(
            probes, timeout=timeout / 1000, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        for task in probes:
            task.cancel()
        await asyncio.gather(*probes, return_exceptions=True)

    if not done:
        raise ReadinessTimeoutError(
            f"no readiness signal within {timeout:.0f}ms "
            f"({', '.join(probes.values())})"
        )

    for task in done:
        if task.exception() is None:
            return probes[task]

    raise next(iter(done)).exception()  # type: ignore[misc]


@dataclass(frozen=True, kw_only=True)
class PageValidator:
    """Checks that pages load their primary content without errors."""

    page: Page = field(repr=False)
    interstitial: InterstitialHandler
    timeouts: Timeouts
    log: logging.Logger = field(default=log, repr=False)

    async def validate(self, url: str) -> PageOutcome:
        """Validate one URL.

        Same-host responses with status >= 400 are collected from before
        navigation until the readiness race settles. Errors never propagate;
        they are reported in the returned outcome.
        """
        self.log.info("Testing %s...", url)
        response_errors: list[str] = []

        def on_response(response: Response) -> None:
            if response.status >= 400 and is_same_host(response.url, url):
                response_errors.append(
                    format_http_error(response.status, response.url)
                )

        self.page.on("response", on_response)
        try:
            outcome = await self._check(url, response_errors)
        except Exception as e:
            outcome = PageOutcome.failed(url, f"Navigation error: {e}")
        finally:
            self.page.remove_listener("response", on_response)

        if outcome.success:
            self.log.info("✅ %s loaded successfully", url)
        else:
            self.log.warning("❌ %s failed:", url)
            for error in outcome.errors:
                self.log.warning("  - %s", error)
        return outcome

    async def _check(self, url: str, response_errors: list[str]) -> PageOutcome:
        response = await self.page.goto(
            url, wait_until="networkidle", timeout=self.timeouts.navigation
        )
        self.log.info("Navigation to %s finished", url)

        # The warning page can come back on any fresh navigation
        await self.interstitial.clear()

        if response is not None and response.status >= 400:
            return PageOutcome.failed(url, format_http_error(response.status, url))

        try:
            winner = await wait_for_content(self.page, self.timeouts.content_ready)
        except Exception as e:
            return PageOutcome.failed(
                url, f"Timeout waiting for content: {e}", *response_errors
            )
        self.log.debug("Content ready on %s (%s)", url, winner)

        # Late background requests may still report errors
        await self.page.wait_for_timeout(self.timeouts.settle)

        if response_errors:
            return PageOutcome.failed(url, *response_errors)
        return PageOutcome(url=url, success=True)
