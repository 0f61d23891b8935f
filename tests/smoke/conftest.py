"""
Smoke-test fixtures for the standalone mock backend.

Provides the ``mock_api_url`` session-scoped fixture that yields the URL of
a running ``wsgi.py`` server shared across the entire smoke suite.  The
suite is skipped when no server answers there.
"""

from __future__ import annotations

import pytest

from config import get_config
from shared.live_stack import live_url


@pytest.fixture(scope="session")
def mock_api_url() -> str:
    """Yield a reachable mock backend URL for smoke tests."""
    settings = get_config()
    return live_url(
        base_url=settings.MOCK_API_URL,
        wait_seconds=settings.STOREFRONT_WAIT_SECONDS,
        suite_name="smoke",
        probe_path="/api/docs",
    )
