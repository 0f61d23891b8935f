"""
Token issuance for the mock pizza backend.

Two kinds of token leave the mock:

- **Bearer tokens** returned by register/login/update.  They are produced
  by an injected ``TokenGenerator`` so that uniqueness comes from a
  per-generator counter instead of the wall clock.  The storefront treats
  them as opaque strings.
- **Pizza JWTs** returned with every order.  The storefront's delivery page
  sends them back to ``/api/order/verify``, so they are real HS256 JWTs
  that can be checked against the configured secret.

Key Concepts Demonstrated:
- Dependency injection of identifier generators for deterministic tests
- HS256 signing and verification with PyJWT
- Converting library exceptions into the backend's own error taxonomy
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Any, Protocol

import jwt

from .errors import InvalidPizza

PIZZA_JWT_ALGORITHM = "HS256"

# Identifies the franchise kitchen that "baked" the order
PIZZA_VENDOR = {"id": "jwt-pizza-mock", "name": "JWT Pizza Mock Factory"}


class TokenGenerator(Protocol):
    """Callable that mints a new bearer token for ``user_id``."""

    def __call__(self, user_id: str) -> str: ...


class SequentialTokenGenerator:
    """
    Issue ``tok-<user id>-<n>`` tokens.

    ``n`` increases by one for every token this generator issues, so two
    tokens from the same generator can never collide, even for the same
    user within the same millisecond.
    """

    def __init__(self, prefix: str = "tok", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self, user_id: str) -> str:
        return f"{self.prefix}-{user_id}-{next(self._counter)}"


class SignedTokenGenerator:
    """
    Issue HS256-signed JWT bearer tokens.

    The ``jti`` claim is a per-generator sequence number, sent as a string,
    which makes every token unique.  Tokens carry no ``exp`` claim because mock sessions never
    expire.
    """

    def __init__(self, secret: str, start: int = 1):
        self.secret = secret
        self._counter = itertools.count(start)

    def __call__(self, user_id: str) -> str:
        payload: dict[str, Any] = {
            "id": str(user_id),
            "jti": str(next(self._counter)),
            "iat": int(datetime.now(timezone.utc).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=PIZZA_JWT_ALGORITHM)


def build_token_generator(style: str, secret: str) -> TokenGenerator:
    """
    Return the token generator named by ``style``.

    Args:
        style: ``"opaque"`` for :class:`SequentialTokenGenerator` or
            ``"jwt"`` for :class:`SignedTokenGenerator`.
        secret: HS256 secret, only used by the ``"jwt"`` style.

    Raises:
        ValueError: If ``style`` is not a known token style.
    """
    if style == "opaque":
        return SequentialTokenGenerator()
    if style == "jwt":
        return SignedTokenGenerator(secret)
    raise ValueError(f"Unknown token style: {style!r}")


def sign_order(order: dict[str, Any], diner: dict[str, Any] | None, secret: str) -> str:
    """
    Sign a placed order into the pizza JWT returned to the storefront.

    Args:
        order: The stored order, including its assigned ``id``.
        diner: Sanitized view of the ordering user, or ``None`` for an
            anonymous order.
        secret: HS256 signing secret.

    Returns:
        A compact JWS string.
    """
    payload: dict[str, Any] = {
        "vendor": PIZZA_VENDOR,
        "diner": (
            {"id": diner["id"], "name": diner["name"], "email": diner["email"]}
            if diner
            else None
        ),
        "order": order,
    }
    return jwt.encode(payload, secret, algorithm=PIZZA_JWT_ALGORITHM)


def verify_order_token(token: str, secret: str) -> dict[str, Any]:
    """
    Verify a pizza JWT and return its payload.

    Raises:
        InvalidPizza: If the token is malformed or its signature does not
            match ``secret``.
    """
    try:
        return jwt.decode(token, secret, algorithms=[PIZZA_JWT_ALGORITHM])
    except jwt.InvalidTokenError as exc:
        raise InvalidPizza() from exc
