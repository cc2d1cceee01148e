"""Fixtures for module tests running real Chromium against a fake application."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from aiohttp.typedefs import Handler
from playwright.async_api import async_playwright

NEW_SIGNIN_PAGE = """<html><body>
<button title="Accept" onclick="this.remove()">Accept</button>
<div class="email-form">
  <input id="email" type="email">
  <button class="btn-primary" type="button">Next</button>
</div>
<form>
  <div class="password-form">
    <input id="password" type="password">
    <button type="button" title="Sign in"
      onclick="document.cookie='session=1; path=/'; location.href='/';">Sign in</button>
  </div>
</form>
</body></html>"""

OLD_SIGNIN_PAGE = """<html><body>
<form onsubmit="document.cookie='session=1; path=/'; location.href='/'; return false;">
  <input id="SigninForm_email" type="email">
  <input id="SigninForm_password" type="password">
  <button type="submit">Sign in</button>
</form>
</body></html>"""

TABLE_PAGE = """<html><body>
<table><tr><td>Inspection 1</td></tr></table>
</body></html>"""

GRID_PAGE_WITH_ERRORS = """<html><body>
<div class="grid">Invoice 1</div>
<img src="{third_party}/tracker.png">
<script>fetch('/api/broken');</script>
</body></html>"""

SPINNER_PAGE = """<html><body><div class="loading">Loading...</div></body></html>"""


def html(body: str, status: int = 200) -> web.Response:
    """Return an HTML response."""
    return web.Response(text=body, status=status, content_type="text/html")


def build_app() -> web.Application:
    """Build the fake application under test."""

    def signed_in(handler: Handler) -> Handler:
        async def wrapper(request: web.Request) -> web.StreamResponse:
            if request.cookies.get("session") != "1":
                return html("<p>Sign in required</p>", status=401)
            return await handler(request)

        return wrapper

    async def new_signin(_: web.Request) -> web.Response:
        return html(NEW_SIGNIN_PAGE)

    async def old_signin(_: web.Request) -> web.Response:
        return html(OLD_SIGNIN_PAGE)

    async def home(_: web.Request) -> web.Response:
        return html("<p>Dashboard</p>")

    async def table(_: web.Request) -> web.Response:
        return html(TABLE_PAGE)

    async def grid(request: web.Request) -> web.Response:
        # Same server reached through another host name counts as third party
        third_party = f"http://127.0.0.1:{request.url.port}"
        return html(GRID_PAGE_WITH_ERRORS.format(third_party=third_party))

    async def spinner(_: web.Request) -> web.Response:
        return html(SPINNER_PAGE)

    async def broken(_: web.Request) -> web.Response:
        return web.json_response({"error": "boom"}, status=500)

    async def favicon(_: web.Request) -> web.Response:
        return web.Response(status=204)

    app = web.Application()
    app.router.add_get("/auth/signin-v2", new_signin)
    app.router.add_get("/auth/signin", old_signin)
    app.router.add_get("/", home)
    app.router.add_get("/inspection/list", signed_in(table))
    app.router.add_get("/invoice/list", signed_in(grid))
    app.router.add_get("/report/index", signed_in(spinner))
    app.router.add_get("/api/broken", broken)
    app.router.add_get("/favicon.ico", favicon)
    return app


@pytest.fixture(autouse=True)
async def _require_chromium() -> None:
    """Skip module tests when the Playwright Chromium build is not installed."""
    async with async_playwright() as playwright:
        if not Path(playwright.chromium.executable_path).exists():
            pytest.skip("Chromium is not installed (run `playwright install chromium`)")


@pytest.fixture
async def app_url() -> AsyncGenerator[str, None]:
    """Serve the fake application and return its base URL."""
    server = TestServer(build_app(), host="127.0.0.1")
    await server.start_server()
    try:
        yield f"http://localhost:{server.port}"
    finally:
        await server.close()
