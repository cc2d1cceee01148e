"""Models for smoke test results."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, kw_only=True)
class PageOutcome:
    """Verdict for a single validated URL."""

    url: str
    success: bool
    errors: Sequence[str] = ()

    @classmethod
    def failed(cls, url: str, *errors: str) -> "PageOutcome":
        """Build a failed outcome carrying the given errors."""
        return cls(url=url, success=False, errors=errors)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the outcome."""
        return {"url": self.url, "success": self.success, "errors": list(self.errors)}


@dataclass(frozen=True, kw_only=True)
class CompletedRun:
    """Report of a run that reached every configured URL."""

    outcomes: Sequence[PageOutcome]

    @property
    def has_failures(self) -> bool:
        """Whether at least one page failed."""
        return any(not outcome.success for outcome in self.outcomes)

    def to_json_data(self) -> list[dict[str, Any]]:
        """Return the report as a JSON array, one object per URL."""
        return [outcome.to_dict() for outcome in self.outcomes]


@dataclass(frozen=True, kw_only=True)
class AbortedRun:
    """Report of a run that failed before or while checking pages.

    Every configured URL is reported as failed with the causing error,
    whether or not it was attempted.
    """

    error: str
    outcomes: Sequence[PageOutcome]

    @classmethod
    def for_urls(cls, error: str, urls: Sequence[str]) -> "AbortedRun":
        """Mark every URL as failed with the same error."""
        return cls(
            error=error,
            outcomes=[PageOutcome.failed(url, error) for url in urls],
        )

    @property
    def has_failures(self) -> bool:
        """Aborted runs always count as failed."""
        return True

    def to_json_data(self) -> dict[str, Any]:
        """Return the degraded report shape."""
        return {
            "error": self.error,
            "urls": [outcome.to_dict() for outcome in self.outcomes],
        }


type RunReport = CompletedRun | AbortedRun
