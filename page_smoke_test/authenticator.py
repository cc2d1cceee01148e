"""Form-based sign-in supporting the old and new login pages."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from page_smoke_test.models.config import Credentials, Timeouts

log = logging.getLogger(__name__)

CONSENT_BUTTON = "button[title='Accept']"

NEW_UI_EMAIL = "#email"
NEW_UI_CONTINUE = ".email-form .btn-primary"
NEW_UI_PASSWORD = "#password"
NEW_UI_SIGN_IN = "//form/div[@class='password-form']/button[@title='Sign in']"

OLD_UI_EMAIL = "#SigninForm_email"
OLD_UI_PASSWORD = "#SigninForm_password"


class LoginError(Exception):
    """Raised when the sign-in form cannot be filled or submitted."""


class LoginUiVariant(StrEnum):
    """Sign-in page variants."""

    NEW = "new"
    OLD = "old"


async def dismiss_consent(page: Page, timeout: float) -> bool:
    """Click the cookie consent button if it shows up within the timeout."""
    try:
        await page.wait_for_selector(CONSENT_BUTTON, timeout=timeout)
    except PlaywrightTimeoutError:
        log.info("No Accept button found, continuing")
        return False

    await page.click(CONSENT_BUTTON)
    log.info("Clicked Accept button")
    return True


async def detect_login_variant(page: Page, timeout: float) -> LoginUiVariant:
    """Pick the login variant by probing for the new email field.

    A probe timeout is the signal for the old page, not an error.
    """
    try:
        await page.wait_for_selector(NEW_UI_EMAIL, timeout=timeout)
    except PlaywrightTimeoutError:
        return LoginUiVariant.OLD
    return LoginUiVariant.NEW


async def submit_new_ui(page: Page, credentials: Credentials) -> None:
    """Two-step sign-in: email first, then password."""
    await page.click(NEW_UI_EMAIL)
    await page.fill(NEW_UI_EMAIL, credentials.identifier)
    await page.click(NEW_UI_CONTINUE)
    await page.fill(NEW_UI_PASSWORD, credentials.secret.get_secret_value())
    await page.click(NEW_UI_SIGN_IN)


async def submit_old_ui(page: Page, credentials: Credentials) -> None:
    """Single form sign-in submitted with Enter."""
    await page.fill(OLD_UI_EMAIL, credentials.identifier)
    await page.fill(OLD_UI_PASSWORD, credentials.secret.get_secret_value())
    await page.press(OLD_UI_PASSWORD, "Enter")


@dataclass(frozen=True, kw_only=True)
class Authenticator:
    """Signs in on the current page using whichever variant is shown."""

    page: Page = field(repr=False)
    credentials: Credentials
    timeouts: Timeouts
    log: logging.Logger = field(default=log, repr=False)

    async def login(self) -> LoginUiVariant:
        """Fill and submit the sign-in form.

        Returns:
            The login page variant that was used

        Raises:
            LoginError: If any step other than the probes fails

        """
        try:
            self.log.info("Starting login process...")
            await self.page.wait_for_timeout(self.timeouts.login_page_delay)
            await dismiss_consent(self.page, self.timeouts.login_probe)

            variant = await detect_login_variant(self.page, self.timeouts.login_probe)
            self.log.info("Detected %s login UI", variant)

            match variant:
                case LoginUiVariant.NEW:
                    await submit_new_ui(self.page, self.credentials)
                case LoginUiVariant.OLD:
                    await submit_old_ui(self.page, self.credentials)
        except Exception as e:
            raise LoginError(f"Login error: {e}") from e

        self.log.info("Login form submitted")
        return variant
