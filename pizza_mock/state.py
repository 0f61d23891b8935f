"""
In-memory state for the mock pizza backend.

All data lives in a single :class:`BackendState` instance that a test
constructs explicitly (via :func:`create_initial_state`) and hands to the
backend.  Nothing here is module-global, so two tests can never observe
each other's users or sessions.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from config import Config, get_config

from .tokens import TokenGenerator, build_token_generator


class Role(str, Enum):
    """Enumeration of the roles a pizza user can hold."""

    ADMIN = "admin"
    DINER = "diner"
    FRANCHISEE = "franchisee"


IdGenerator = Callable[[], str]


class SequentialIdGenerator:
    """Hand out ``"1"``, ``"2"``, ... as user ids; an id is never reused."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return str(next(self._counter))


@dataclass
class UserRecord:
    """
    A stored pizza user.

    Attributes:
        id: Opaque string id allocated by the id generator.
        name: Display name; the storefront renders its initials as the avatar.
        email: Login lookup key.  Uniqueness is not enforced.
        password: Plain-text password, compared verbatim on login.
        roles: Ordered role entries such as ``{"role": "diner"}``.
    """

    id: str
    name: str
    email: str
    password: str
    roles: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """
        Return the sanitized view of this user.

        ``password`` is never included, so the result can be returned
        directly in a JSON response.
        """
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "roles": [dict(role) for role in self.roles],
        }

    def __repr__(self) -> str:
        return f"<UserRecord {self.id}: {self.email}>"


@dataclass
class BackendState:
    """
    Everything the mock backend knows during one test.

    Attributes:
        users: Stored users keyed by id.
        tokens: Issued bearer tokens mapped to the owning user id.
        logged_in_user_id: Fallback identity used when a request carries
            no bearer token.
        orders: Placed orders keyed by the ordering user's id.
        order_ids: Source of sequential order ids.
        id_generator: Source of new user ids.
        token_generator: Source of new bearer tokens.
        seed_admin_id: Id of the admin account the state was seeded with.
    """

    id_generator: IdGenerator
    token_generator: TokenGenerator
    users: dict[str, UserRecord] = field(default_factory=dict)
    tokens: dict[str, str] = field(default_factory=dict)
    logged_in_user_id: str | None = None
    orders: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    order_ids: Iterator = field(default_factory=lambda: itertools.count(1))
    seed_admin_id: str | None = None


def create_initial_state(
    config: type[Config] | None = None,
    id_generator: IdGenerator | None = None,
    token_generator: TokenGenerator | None = None,
) -> BackendState:
    """
    Build a fresh backend state seeded with one admin user.

    The seeded admin takes the configured ``SEED_ADMIN_ID``; generated ids
    start after it so registration never reissues the admin's id.

    Args:
        config: Configuration class; defaults to the one selected by
            ``FLASK_ENV``.
        id_generator: Override for the user id source.
        token_generator: Override for the bearer token source.

    Returns:
        A new :class:`BackendState` owned by the caller.
    """
    config = config or get_config()

    if id_generator is None:
        seed_id = config.SEED_ADMIN_ID
        start = int(seed_id) + 1 if seed_id.isdigit() else 1
        id_generator = SequentialIdGenerator(start)
    if token_generator is None:
        token_generator = build_token_generator(
            config.TOKEN_STYLE, config.AUTH_TOKEN_SECRET
        )

    state = BackendState(id_generator=id_generator, token_generator=token_generator)
    admin = UserRecord(
        id=config.SEED_ADMIN_ID,
        name=config.SEED_ADMIN_NAME,
        email=config.SEED_ADMIN_EMAIL,
        password=config.SEED_ADMIN_PASSWORD,
        roles=[{"role": Role.ADMIN.value}],
    )
    state.users[admin.id] = admin
    state.seed_admin_id = admin.id
    return state
