"""Models for the run configuration loaded from the smoke test YAML file."""

from collections.abc import Sequence

from pydantic import Field, SecretStr, field_validator
from yarl import URL

from page_smoke_test.models.base import Model


def _require_absolute_url(value: str) -> str:
    url = URL(value)
    if url.scheme not in {"http", "https"} or not url.host:
        raise ValueError(f"Expected an absolute http(s) URL, got {value!r}")
    return value


class Credentials(Model):
    """Credential pair used to sign in."""

    identifier: str = Field(..., min_length=1, description="Sign-in email")
    secret: SecretStr = Field(..., description="Sign-in password")


class Timeouts(Model):
    """Fixed waits and timeouts, in milliseconds.

    Values handed to Playwright as timeouts must be positive, since Playwright
    reads 0 as "wait forever". Plain delays may be 0.
    """

    navigation: int = Field(default=30000, gt=0)
    content_ready: int = Field(default=10000, gt=0)
    settle: int = Field(
        default=2000, ge=0, description="Delay after content is ready"
    )
    login_probe: int = Field(
        default=1000, gt=0, description="Consent button and login UI probes"
    )
    login_page_delay: int = Field(default=5000, ge=0)
    post_login_delay: int = Field(default=5000, ge=0)
    interstitial_probe_delay: int = Field(default=2000, ge=0)
    interstitial_grace_period: int = Field(default=15000, ge=0)
    interstitial_settle: int = Field(default=3000, ge=0)


class RunConfiguration(Model):
    """Complete input of one smoke test run."""

    signin_url: str = Field(..., description="Canonical sign-in page URL")
    urls: Sequence[str] = Field(..., min_length=1, description="Pages to check")
    credentials: Credentials
    timeouts: Timeouts = Field(default_factory=Timeouts)
    headless: bool = True

    @field_validator("signin_url")
    @classmethod
    def _check_signin_url(cls, value: str) -> str:
        return _require_absolute_url(value)

    @field_validator("urls")
    @classmethod
    def _check_urls(cls, value: Sequence[str]) -> Sequence[str]:
        return tuple(_require_absolute_url(url) for url in value)
