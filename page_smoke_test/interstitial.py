"""Detection and manual bypass of the browser TLS warning page."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from playwright.async_api import Page

from page_smoke_test.models.config import Timeouts

log = logging.getLogger(__name__)

INTERSTITIAL_PHRASES: Sequence[str] = (
    "Your connection is not private",
    "NET::ERR_CERT_AUTHORITY_INVALID",
    "This connection is not private",
)


def is_interstitial(text: str | None) -> bool:
    """Check whether page text belongs to the certificate warning page."""
    if not text:
        return False
    return any(phrase in text for phrase in INTERSTITIAL_PHRASES)


def operator_instructions(host: str) -> str:
    """Return the manual bypass steps shown to the operator."""
    return (
        "SSL Certificate Error Detected!\n\n"
        "Please:\n"
        '1. Click "Advanced" button\n'
        f'2. Click "Proceed to {host} (unsafe)"\n\n'
        "Test will continue automatically."
    )


@dataclass(frozen=True, kw_only=True)
class InterstitialHandler:
    """Clears the certificate warning page, pausing for the operator if shown."""

    page: Page = field(repr=False)
    signin_url: str
    host: str
    timeouts: Timeouts
    log: logging.Logger = field(default=log, repr=False)

    async def clear(self) -> bool:
        """Probe the current page and handle the warning if present.

        Returns:
            True if the warning page was detected and handled, False otherwise.
            Probe failures are logged and reported as False; they never abort
            the run.

        """
        try:
            await self.page.wait_for_timeout(self.timeouts.interstitial_probe_delay)
            if not is_interstitial(await self.page.text_content("body")):
                return False

            instructions = operator_instructions(self.host)
            grace_seconds = self.timeouts.interstitial_grace_period / 1000
            self.log.warning("SSL certificate error detected")
            self.log.warning(
                "Action required: click 'Advanced', then 'Proceed to %s (unsafe)'",
                self.host,
            )
            self.log.warning("Waiting %.0fs for manual bypass...", grace_seconds)

            await self.page.evaluate("message => alert(message)", instructions)
            await self.page.wait_for_timeout(self.timeouts.interstitial_grace_period)

            self.log.info("Retrying navigation to %s", self.signin_url)
            await self.page.goto(self.signin_url)
            await self.page.wait_for_timeout(self.timeouts.interstitial_settle)
            self.log.info("SSL warning handled, continuing")
            return True
        except Exception as e:
            self.log.warning("Could not check for SSL warning, continuing: %s", e)
            return False
