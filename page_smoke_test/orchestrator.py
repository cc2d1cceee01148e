"""Smoke test orchestrator: sign in once, then check every page in order."""

import logging
from collections.abc import Callable, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field

from yarl import URL

from page_smoke_test.authenticator import Authenticator
from page_smoke_test.interstitial import InterstitialHandler
from page_smoke_test.models.config import RunConfiguration
from page_smoke_test.models.result import (
    AbortedRun,
    CompletedRun,
    PageOutcome,
    RunReport,
)
from page_smoke_test.session import BrowserSession, open_browser_session
from page_smoke_test.validator import PageValidator

log = logging.getLogger(__name__)

type SessionFactory = Callable[
    [RunConfiguration], AbstractAsyncContextManager[BrowserSession]
]


@dataclass(frozen=True, kw_only=True)
class SmokeTestOrchestrator:
    """Runs one smoke test pass over the configured pages."""

    config: RunConfiguration
    session_factory: SessionFactory = open_browser_session
    log: logging.Logger = field(default=log, repr=False)

    async def run(self) -> RunReport:
        """Run the smoke test and build its report.

        Pages are checked one at a time in configuration order. Failures of a
        single page only affect that page's outcome. Failures while starting
        the browser or signing in abort the run: every configured URL is then
        reported as failed with the causing error. The browser session is
        closed before this method returns on every path.
        """
        try:
            async with self.session_factory(self.config) as session:
                outcomes = await self._run_session(session)
        except Exception as e:
            self.log.error("Test execution failed: %s", e, exc_info=e)
            return AbortedRun.for_urls(str(e), self.config.urls)

        return CompletedRun(outcomes=outcomes)

    async def _run_session(self, session: BrowserSession) -> Sequence[PageOutcome]:
        page = session.page
        timeouts = self.config.timeouts
        interstitial = InterstitialHandler(
            page=page,
            signin_url=self.config.signin_url,
            host=URL(self.config.signin_url).host or "",
            timeouts=timeouts,
            log=self.log.getChild("interstitial"),
        )

        self.log.info("Navigating to login page %s", self.config.signin_url)
        await page.goto(self.config.signin_url)
        await interstitial.clear()

        authenticator = Authenticator(
            page=page,
            credentials=self.config.credentials,
            timeouts=timeouts,
            log=self.log.getChild("authenticator"),
        )
        await authenticator.login()

        self.log.info("Waiting for login to complete...")
        await page.wait_for_timeout(timeouts.post_login_delay)

        validator = PageValidator(
            page=page,
            interstitial=interstitial,
            timeouts=timeouts,
            log=self.log.getChild("validator"),
        )
        outcomes: list[PageOutcome] = []
        for url in self.config.urls:
            outcomes.append(await validator.validate(url))
        return outcomes
