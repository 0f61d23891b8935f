"""
Test-suite configuration module.

This module defines configuration classes for the environments the
JWT Pizza suite runs in (local development, the pytest run itself, and
CI).  Configuration values are loaded from environment variables with
sensible defaults so that a CI job can point the browser at a deployed
storefront without touching code.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Base configuration with default settings."""

    # Storefront the browser drives; the mock backend never serves HTML.
    STOREFRONT_URL: str = os.environ.get("STOREFRONT_URL", "http://localhost:5173")
    # Standalone mock server (wsgi.py), probed by the smoke suite
    MOCK_API_URL: str = os.environ.get("MOCK_API_URL", "http://localhost:3000")

    # Seed account present in every freshly created backend state
    SEED_ADMIN_ID: str = os.environ.get("SEED_ADMIN_ID", "1")
    SEED_ADMIN_NAME: str = os.environ.get("SEED_ADMIN_NAME", "pizza admin")
    SEED_ADMIN_EMAIL: str = os.environ.get("SEED_ADMIN_EMAIL", "a@jwt.com")
    SEED_ADMIN_PASSWORD: str = os.environ.get("SEED_ADMIN_PASSWORD", "admin")

    # "opaque" issues tok-<id>-<n> strings, "jwt" issues signed HS256 tokens
    TOKEN_STYLE: str = os.environ.get("TOKEN_STYLE", "opaque")
    AUTH_TOKEN_SECRET: str = os.environ.get(
        "AUTH_TOKEN_SECRET", "mock-auth-secret-for-local-tests"
    )
    # Signs the JWT handed back with every pizza order
    PIZZA_JWT_SECRET: str = os.environ.get(
        "PIZZA_JWT_SECRET", "mock-pizza-factory-secret-for-local-tests"
    )

    # Playwright expectation timeout in milliseconds
    EXPECT_TIMEOUT_MS: int = int(os.environ.get("EXPECT_TIMEOUT_MS", "5000"))
    # Seconds to wait for the storefront to answer before skipping E2E tests
    STOREFRONT_WAIT_SECONDS: int = int(os.environ.get("STOREFRONT_WAIT_SECONDS", "10"))
    SCREENSHOT_DIR: str = os.environ.get(
        "SCREENSHOT_DIR", str(BASE_DIR / "test-results" / "screenshots")
    )


class DevelopmentConfig(Config):
    """Local development configuration (standalone mock server)."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Configuration used while pytest drives the suite."""

    DEBUG: bool = True
    # Exceptions raised inside a view propagate to the intercepting test
    TESTING: bool = True


class CIConfig(TestingConfig):
    """CI configuration: slower shared runners get more headroom."""

    DEBUG: bool = False
    EXPECT_TIMEOUT_MS: int = int(os.environ.get("EXPECT_TIMEOUT_MS", "15000"))
    STOREFRONT_WAIT_SECONDS: int = int(os.environ.get("STOREFRONT_WAIT_SECONDS", "60"))


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "ci": CIConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, ci).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
