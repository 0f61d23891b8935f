"""Shared readiness helpers for the suites that need a running server."""

from __future__ import annotations

import time

import pytest
import requests


def is_ready(url: str, timeout: int = 2) -> bool:
    """Return True when ``url`` responds with 200."""
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException:
        return False
    return response.status_code == 200


def wait_until_ready(url: str, timeout: int = 60, interval: int = 1) -> None:
    """Poll ``url`` until ready or timeout."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_ready(url):
            return
        time.sleep(interval)
    raise RuntimeError(f"{url} not reachable after {timeout}s")


def live_url(*, base_url: str, wait_seconds: int, suite_name: str, probe_path: str = "") -> str:
    """
    Return a reachable base URL, or skip the calling suite.

    Neither the storefront (a separate Vite application) nor the standalone
    mock server is started by the suite.  Point ``STOREFRONT_URL`` /
    ``MOCK_API_URL`` at running instances to run the suites that need them.

    Args:
        base_url: Root URL of the server.
        wait_seconds: How long to poll before giving up.
        suite_name: Named in the skip reason.
        probe_path: Path polled for readiness, relative to ``base_url``.
    """
    base_url = base_url.rstrip("/")
    try:
        wait_until_ready(f"{base_url}{probe_path}", timeout=wait_seconds)
    except RuntimeError as exc:
        pytest.skip(f"{exc}; start the server or set its URL to run {suite_name} tests")
    return base_url
