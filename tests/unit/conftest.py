"""Shared fixtures for unit tests."""

from collections.abc import Sequence
from unittest.mock import Mock

import pytest
from playwright.async_api import Page

from page_smoke_test.interstitial import InterstitialHandler
from page_smoke_test.models.config import RunConfiguration, Timeouts
from page_smoke_test.testing.factories import (
    APP_HOST,
    SIGNIN_URL,
    RunConfigurationFactory,
    TimeoutsFactory,
)
from page_smoke_test.testing.pages import GotoScript, make_response


@pytest.fixture
def page_mock() -> Mock:
    """Create a page double that loads an ordinary application page."""
    page = Mock(spec=Page)
    page.text_content.return_value = "Inspections"
    page.goto.side_effect = lambda url, **_: make_response(url, 200)
    return page


@pytest.fixture
def timeouts() -> Timeouts:
    """Timeouts short enough for unit tests."""
    return TimeoutsFactory.build()


@pytest.fixture
def run_config() -> RunConfiguration:
    """Run configuration with two pages."""
    return RunConfigurationFactory.build()


@pytest.fixture
def interstitial(page_mock: Mock, timeouts: Timeouts) -> InterstitialHandler:
    """Interstitial handler bound to the page double."""
    return InterstitialHandler(
        page=page_mock, signin_url=SIGNIN_URL, host=APP_HOST, timeouts=timeouts
    )


@pytest.fixture
def script_goto(page_mock: Mock) -> GotoScript:
    """Make navigation emit the given responses to registered listeners."""

    def _script(status: int = 200, responses: Sequence[Mock] = ()) -> None:
        async def goto(url: str, **_: object) -> Mock:
            for call in page_mock.on.call_args_list:
                event, handler = call.args
                if event == "response":
                    for response in responses:
                        handler(response)
            return make_response(url, status)

        page_mock.goto.side_effect = goto

    return _script
