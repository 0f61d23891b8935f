"""Playwright fixtures for JWT Pizza E2E tests."""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest
from playwright.sync_api import Browser, BrowserContext, Page, expect

from config import get_config
from pizza_mock.backend import UserTestBackend
from pizza_mock.interception import setup_user_test_backend
from shared.live_stack import live_url
from tests.e2e.pages.dashboard_pages import (
    AdminDashboardPage,
    DinerDashboardPage,
    FranchiseDashboardPage,
)
from tests.e2e.pages.home_page import DocsPage, HomePage
from tests.e2e.pages.login_page import LoginPage
from tests.e2e.pages.order_pages import DeliveryPage, MenuPage, PaymentPage
from tests.e2e.pages.register_page import RegisterPage

settings = get_config()
expect.set_options(timeout=settings.EXPECT_TIMEOUT_MS)


@pytest.fixture(scope="session")
def storefront() -> str:
    """
    Return the URL of a running JWT Pizza storefront.

    Set STOREFRONT_URL to target another instance.  The whole E2E suite is
    skipped when nothing answers there.
    """
    return live_url(
        base_url=settings.STOREFRONT_URL,
        wait_seconds=settings.STOREFRONT_WAIT_SECONDS,
        suite_name="E2E",
    )


@pytest.fixture(scope="session")
def browser_context_args():
    return {
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }


@pytest.fixture(scope="function")
def context(
    browser: Browser, browser_context_args: dict
) -> Generator[BrowserContext, None, None]:
    context = browser.new_context(**browser_context_args)
    yield context
    context.close()


@pytest.fixture(scope="function")
def page(context: BrowserContext, storefront: str) -> Generator[Page, None, None]:
    page = context.new_page()
    yield page
    page.close()


@pytest.fixture
def mock_backend(page: Page, backend: UserTestBackend) -> UserTestBackend:
    """
    Route the page's API traffic to this test's mock backend.

    Installed before any navigation.  Stubs a test registers afterwards
    are consulted first and can hand requests back with ``route.fallback()``.
    """
    return setup_user_test_backend(page, backend)


# -----------------------------------------------------------------------------
# Page Object Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def home_page(page: Page, storefront: str) -> HomePage:
    return HomePage(page, storefront)


@pytest.fixture
def docs_page(page: Page, storefront: str) -> DocsPage:
    return DocsPage(page, storefront)


@pytest.fixture
def login_page(page: Page, storefront: str) -> LoginPage:
    return LoginPage(page, storefront)


@pytest.fixture
def register_page(page: Page, storefront: str) -> RegisterPage:
    return RegisterPage(page, storefront)


@pytest.fixture
def menu_page(page: Page, storefront: str) -> MenuPage:
    return MenuPage(page, storefront)


@pytest.fixture
def payment_page(page: Page, storefront: str) -> PaymentPage:
    return PaymentPage(page, storefront)


@pytest.fixture
def delivery_page(page: Page, storefront: str) -> DeliveryPage:
    return DeliveryPage(page, storefront)


@pytest.fixture
def diner_dashboard(page: Page, storefront: str) -> DinerDashboardPage:
    return DinerDashboardPage(page, storefront)


@pytest.fixture
def admin_dashboard(page: Page, storefront: str) -> AdminDashboardPage:
    return AdminDashboardPage(page, storefront)


@pytest.fixture
def franchise_dashboard(page: Page, storefront: str) -> FranchiseDashboardPage:
    return FranchiseDashboardPage(page, storefront)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture screenshot on UI test failure."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        page = item.funcargs.get("page")
        if page:
            screenshot_dir = settings.SCREENSHOT_DIR
            os.makedirs(screenshot_dir, exist_ok=True)
            test_name = item.name.replace("/", "_").replace("::", "_")
            screenshot_path = os.path.join(screenshot_dir, f"{test_name}.png")
            try:
                page.screenshot(path=screenshot_path)
                print(f"\nScreenshot saved: {screenshot_path}")
            except Exception as exc:  # pragma: no cover - best effort logging
                print(f"\nFailed to capture screenshot: {exc}")
