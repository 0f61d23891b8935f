"""
Playwright route interception for the mock pizza backend.

:func:`setup_user_test_backend` registers ``page.route`` handlers for the
storefront's API families.  Each intercepted browser request is replayed
into the mock Flask application through its in-process test client, and
the Flask response is handed back to the browser with ``route.fulfill``.
Nothing ever reaches the network.

Requests the Flask application has no route for (for example
``/api/franchise/<id>/store`` in a franchise test) are passed on with
``route.fallback()`` so that handlers registered earlier, typically
per-test stubs, get a chance to answer them.

Key Concepts Demonstrated:
- Request relaying between two HTTP stacks (browser <-> WSGI app)
- Hop-by-hop header filtering on both legs of the relay
- Fallthrough for unmatched routes instead of fabricated 404s
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

from flask import Flask
from playwright.sync_api import Page, Route
from werkzeug.exceptions import HTTPException

from . import EXTENSION_KEY, create_app
from .backend import UserTestBackend

logger = logging.getLogger(__name__)

# One pattern per API family.  Playwright searches the full request URL.
API_ROUTE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"/api/auth(\?.*)?$"),
    re.compile(r"/api/user(/[^?]*)?(\?.*)?$"),
    re.compile(r"/api/franchise(/[^?]*)?(\?.*)?$"),
    re.compile(r"/api/order(/[^?]*)?(\?.*)?$"),
    re.compile(r"/api/docs(\?.*)?$"),
)

# Connection-level headers never cross the relay, and Host/Content-Length
# describe the browser's request, not the replayed one.
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
}
DROPPED_REQUEST_HEADERS = HOP_BY_HOP_HEADERS | {"host", "content-length"}
DROPPED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-length"}


def _forwarded_request_headers(headers: dict[str, str], has_body: bool) -> dict[str, str]:
    """
    Build the header dict for the replayed request.

    Bodies the storefront sends are always JSON; a missing Content-Type is
    filled in so Flask's ``get_json`` accepts them.
    """
    forwarded = {
        name: value
        for name, value in headers.items()
        if name.lower() not in DROPPED_REQUEST_HEADERS
    }
    if has_body and not any(name.lower() == "content-type" for name in forwarded):
        forwarded["Content-Type"] = "application/json"
    return forwarded


class PlaywrightBridge:
    """
    Relay intercepted Playwright routes into a Flask application.

    Attributes:
        app: The mock backend application answering the requests.
    """

    def __init__(self, app: Flask):
        self.app = app
        self._url_adapter = app.url_map.bind("localhost")

    def handles(self, method: str, path: str) -> bool:
        """Return True when the application has a rule for ``method path``."""
        try:
            self._url_adapter.match(path, method=method)
        except HTTPException:
            return False
        return True

    def forward(self, route: Route) -> None:
        """Answer ``route`` from the Flask app, or fall back when it has no rule."""
        browser_request = route.request
        url = urlsplit(browser_request.url)

        if not self.handles(browser_request.method, url.path):
            logger.debug("No mock rule for %s %s, falling back", browser_request.method, url.path)
            route.fallback()
            return

        body = browser_request.post_data_buffer
        headers = dict(browser_request.headers)
        with self.app.test_client() as client:
            response = client.open(
                url.path,
                method=browser_request.method,
                query_string=url.query,
                headers=_forwarded_request_headers(headers, has_body=bool(body)),
                data=body,
            )

        logger.debug(
            "Intercepted %s %s -> %s", browser_request.method, url.path, response.status_code
        )

        response_headers = {
            name: value
            for name, value in response.headers.items()
            if name.lower() not in DROPPED_RESPONSE_HEADERS
        }
        route.fulfill(
            status=response.status_code,
            headers=response_headers,
            body=response.get_data(),
        )


def setup_user_test_backend(
    page: Page,
    backend: UserTestBackend | None = None,
    config_name: str | None = "testing",
) -> UserTestBackend:
    """
    Route the storefront's API calls on ``page`` to a mock backend.

    Call this before ``page.goto`` so that the storefront's first requests
    are already intercepted.  Stubs registered on the page afterwards take
    precedence and may hand requests back with ``route.fallback()``.

    Args:
        page: The Playwright page driving the storefront.
        backend: Backend (and therefore state) owned by the calling test.
            A fresh seeded backend is built when ``None``.
        config_name: Configuration environment for the mock application.

    Returns:
        The backend answering the page's requests, so the test can inspect
        or pre-populate its state.
    """
    app = create_app(backend, config_name)
    bridge = PlaywrightBridge(app)

    def _handle(route: Route) -> None:
        bridge.forward(route)

    for pattern in API_ROUTE_PATTERNS:
        page.route(pattern, _handle)

    logger.info("Mock pizza backend installed on page (%d route patterns)", len(API_ROUTE_PATTERNS))
    return app.extensions[EXTENSION_KEY]
