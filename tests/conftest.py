"""
Shared pytest fixtures for the JWT Pizza test suite.

This module contains fixtures that are shared across all test modules.
Every test gets its own backend state, so users, tokens and orders created
by one test are never visible to another.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies (state -> backend -> app -> client)
- Test data factories backed by Faker
- Deterministic identifier generators injected into the system under test
"""

import os
from collections.abc import Callable
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing the mock backend
os.environ["FLASK_ENV"] = "testing"

from config import TestingConfig
from pizza_mock import create_app
from pizza_mock.backend import UserTestBackend
from pizza_mock.state import BackendState, create_initial_state
from pizza_mock.tokens import SequentialTokenGenerator


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Backend Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def state() -> BackendState:
    """
    Create a fresh backend state seeded with the admin user.

    Tokens come from a sequential generator so their values are
    predictable within a test.
    """
    return create_initial_state(
        TestingConfig, token_generator=SequentialTokenGenerator()
    )


@pytest.fixture
def backend(state: BackendState) -> UserTestBackend:
    """Provide a backend operating on this test's state."""
    return UserTestBackend(state, pizza_secret=TestingConfig.PIZZA_JWT_SECRET)


@pytest.fixture
def app(backend: UserTestBackend):
    """
    Create the mock backend Flask app around this test's backend.

    Unlike a database-backed app, the mock is cheap to build, so it is
    function-scoped and shares nothing between tests.
    """
    return create_app(backend, "testing")


@pytest.fixture
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def user_factory(backend: UserTestBackend) -> Callable[..., dict[str, Any]]:
    """
    Factory fixture that registers users through the backend.

    Returns the registration response augmented with the plain-text
    password so tests can log the user in again.

    Example:
        def test_something(user_factory):
            diner = user_factory(name="pizza diner")
            assert diner["user"]["roles"] == [{"role": "diner"}]
    """

    def _register(
        name: str | None = None,
        email: str | None = None,
        password: str = "diner",
        roles: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        result = backend.register(
            name=name or fake.name(),
            email=email or fake.unique.email(),
            password=password,
            roles=roles,
        )
        return {**result, "password": password}

    return _register


@pytest.fixture
def seeded_admin() -> dict[str, str]:
    """Credentials of the admin every fresh state is seeded with."""
    return {
        "id": TestingConfig.SEED_ADMIN_ID,
        "name": TestingConfig.SEED_ADMIN_NAME,
        "email": TestingConfig.SEED_ADMIN_EMAIL,
        "password": TestingConfig.SEED_ADMIN_PASSWORD,
    }


# -----------------------------------------------------------------------------
# API Helper Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def api_base_url() -> str:
    """
    Provide the base URL for API endpoints.

    Returns:
        Base URL string for API routes.
    """
    return "/api"
