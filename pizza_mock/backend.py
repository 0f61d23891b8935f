"""
Mock authentication & resource backend.

:class:`UserTestBackend` implements the behaviour the storefront expects
from the pizza service (registration, login/logout, token-based identity,
user administration, the menu and ordering) on top of an explicitly
passed :class:`~pizza_mock.state.BackendState`.

Every operation returns plain JSON-ready dicts.  The only failures are the
:mod:`pizza_mock.errors` exceptions; everything else is total.

Key Concepts Demonstrated:
- Explicit state ownership (no module-level singletons)
- Sanitized views that never expose stored passwords
- Idempotent deletion and logout
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from typing import Any

from . import catalog
from .errors import NotFound, Unauthorized
from .state import BackendState, Role, UserRecord
from .tokens import sign_order, verify_order_token

logger = logging.getLogger(__name__)


def _role_entries(roles: Any) -> list[dict[str, Any]]:
    """Copy the dict entries of a client-supplied ``roles`` value; anything else is dropped."""
    if not isinstance(roles, list):
        return []
    return [dict(role) for role in roles if isinstance(role, dict)]


class UserTestBackend:
    """
    In-memory stand-in for the pizza service.

    Attributes:
        state: The test-owned state every operation reads and mutates.
        pizza_secret: HS256 secret used to sign and verify pizza JWTs.
    """

    def __init__(self, state: BackendState, pizza_secret: str):
        self.state = state
        self.pizza_secret = pizza_secret

    # -------------------------------------------------------------------------
    # Session Helpers
    # -------------------------------------------------------------------------

    def _issue_session(self, user: UserRecord) -> dict[str, Any]:
        """Mint a token for ``user``, mark them logged in and build the auth response."""
        token = self.state.token_generator(user.id)
        self.state.tokens[token] = user.id
        self.state.logged_in_user_id = user.id
        return {"user": user.to_dict(), "token": token}

    def _require_user(self, user_id: str) -> UserRecord:
        user = self.state.users.get(str(user_id))
        if user is None:
            raise NotFound()
        return user

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    def register(
        self,
        name: str | None,
        email: str,
        password: str,
        roles: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """
        Create a user and log them in.

        Duplicate emails are accepted.  When ``roles`` is missing, empty or
        holds no role entries the user becomes a diner.

        Returns:
            ``{"user": <sanitized user>, "token": <bearer token>}``.
        """
        user = UserRecord(
            id=self.state.id_generator(),
            name=name or "",
            email=email,
            password=password,
            roles=_role_entries(roles) or [{"role": Role.DINER.value}],
        )
        self.state.users[user.id] = user
        logger.debug("Registered user %s <%s>", user.id, user.email)
        return self._issue_session(user)

    def login(self, email: str, password: str) -> dict[str, Any]:
        """
        Authenticate by email and password.

        The first stored user with a matching email is checked; later
        duplicates are never considered.

        Raises:
            Unauthorized: If no user has ``email`` or the password differs.
        """
        user = next(
            (candidate for candidate in self.state.users.values() if candidate.email == email),
            None,
        )
        if user is None or user.password != password:
            raise Unauthorized()
        return self._issue_session(user)

    def logout(self, bearer_token: str | None = None) -> dict[str, str]:
        """Forget ``bearer_token`` (if known) and clear the logged-in user."""
        if bearer_token:
            self.state.tokens.pop(bearer_token, None)
        self.state.logged_in_user_id = None
        return {"message": "logout successful"}

    def resolve_current_user(self, bearer_token: str | None = None) -> dict[str, Any] | None:
        """
        Work out who is making a request.

        A known bearer token wins.  Without one, the logged-in user is used.
        Returns ``None`` when neither identifies a stored user.
        """
        if bearer_token and bearer_token in self.state.tokens:
            user = self.state.users.get(self.state.tokens[bearer_token])
            if user is not None:
                return user.to_dict()

        if self.state.logged_in_user_id is not None:
            user = self.state.users.get(self.state.logged_in_user_id)
            if user is not None:
                return user.to_dict()
        return None

    # -------------------------------------------------------------------------
    # User Administration
    # -------------------------------------------------------------------------

    def list_users(self) -> dict[str, dict[str, Any]]:
        return {user_id: user.to_dict() for user_id, user in self.state.users.items()}

    def get_user(self, user_id: str) -> dict[str, Any]:
        return self._require_user(user_id).to_dict()

    def update_user(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> dict[str, Any]:
        """
        Overwrite the supplied profile fields and re-issue a session.

        Empty or missing values leave the stored field untouched.

        Raises:
            NotFound: If ``user_id`` is not stored.
        """
        user = self._require_user(user_id)
        if name:
            user.name = name
        if email:
            user.email = email
        if password:
            user.password = password
        return self._issue_session(user)

    def delete_user(self, user_id: str) -> dict[str, str]:
        """Remove a user; unknown ids are ignored."""
        self.state.users.pop(str(user_id), None)
        return {"message": "user deleted"}

    # -------------------------------------------------------------------------
    # Franchises & Orders
    # -------------------------------------------------------------------------

    def list_franchises(self) -> dict[str, Any]:
        admin = self.state.users.get(self.state.seed_admin_id or "")
        return {
            "franchises": catalog.franchises(admin.to_dict() if admin else None),
            "more": False,
        }

    def menu(self) -> list[dict[str, Any]]:
        return catalog.menu()

    def create_order(
        self, order: dict[str, Any], bearer_token: str | None = None
    ) -> dict[str, Any]:
        """
        Record an order for the current user and sign it into a pizza JWT.

        Returns:
            ``{"order": <order with id>, "jwt": <pizza JWT>}``.
        """
        diner = self.resolve_current_user(bearer_token)
        stored = {
            **copy.deepcopy(order),
            "id": next(self.state.order_ids),
            "date": datetime.now(timezone.utc).isoformat(),
        }
        if diner is not None:
            self.state.orders.setdefault(diner["id"], []).append(stored)
        logger.debug("Order %s placed by %s", stored["id"], diner and diner["id"])
        return {
            "order": copy.deepcopy(stored),
            "jwt": sign_order(stored, diner, self.pizza_secret),
        }

    def order_history(self, bearer_token: str | None = None) -> dict[str, Any]:
        diner = self.resolve_current_user(bearer_token)
        diner_id = diner["id"] if diner else None
        return {
            "dinerId": diner_id,
            "orders": copy.deepcopy(self.state.orders.get(diner_id, [])) if diner_id else [],
            "page": 1,
        }

    def verify_order(self, pizza_jwt: str) -> dict[str, Any]:
        """
        Check a pizza JWT handed out by :meth:`create_order`.

        Raises:
            InvalidPizza: If the JWT cannot be verified.
        """
        return {
            "message": "valid",
            "payload": verify_order_token(pizza_jwt, self.pizza_secret),
        }
