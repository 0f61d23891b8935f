"""
Mock pizza service API endpoints.

Implements the HTTP surface the JWT Pizza storefront talks to.  Every view
is a thin adapter: parse the JSON body and bearer token, call the matching
:class:`~pizza_mock.backend.UserTestBackend` operation, and return its
result as JSON.  Backend errors are turned into responses by the handler
registered in :func:`pizza_mock.create_app`.

Endpoints:
    POST   /auth             -- Register a new user.
    PUT    /auth             -- Log in.
    DELETE /auth             -- Log out.
    GET    /user/me          -- The authenticated user, or null.
    GET    /user             -- Every user keyed by id.
    GET    /user/<id>        -- One user.
    PUT    /user/<id>        -- Update a user's profile.
    DELETE /user/<id>        -- Delete a user.
    GET    /franchise        -- Franchise and store listing.
    GET    /order/menu       -- The pizza menu.
    POST   /order            -- Place an order.
    GET    /order            -- The current diner's orders.
    POST   /order/verify     -- Verify a pizza JWT.
    GET    /docs             -- Generated endpoint documentation.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, current_app, jsonify, request

from .. import EXTENSION_KEY
from ..backend import UserTestBackend

api_bp = Blueprint("pizza_api", __name__)

API_VERSION = "mock-1"

# Views the real service guards with a bearer token; used by /docs only,
# the mock itself never rejects an anonymous request.
AUTHENTICATED_VIEWS = {
    "logout",
    "get_me",
    "list_users",
    "get_user",
    "update_user",
    "delete_user",
    "create_order",
    "order_history",
}

_USER = {"id": "2", "name": "pizza diner", "email": "d@jwt.com", "roles": [{"role": "diner"}]}
_JSON = "-H 'Content-Type: application/json'"
_AUTH = "-H 'Authorization: Bearer tttttt'"

# Sample request and response shown next to each endpoint in /docs
DOC_EXAMPLES: dict[str, tuple[str, Any]] = {
    "register": (
        "curl -X POST localhost:3000/api/auth -d '{\"name\":\"pizza diner\", "
        f"\"email\":\"d@jwt.com\", \"password\":\"diner\"}}' {_JSON}",
        {"user": _USER, "token": "tttttt"},
    ),
    "login": (
        "curl -X PUT localhost:3000/api/auth -d '{\"email\":\"d@jwt.com\", "
        f"\"password\":\"diner\"}}' {_JSON}",
        {"user": _USER, "token": "tttttt"},
    ),
    "logout": (
        f"curl -X DELETE localhost:3000/api/auth {_AUTH}",
        {"message": "logout successful"},
    ),
    "get_me": (f"curl localhost:3000/api/user/me {_AUTH}", _USER),
    "list_users": (f"curl localhost:3000/api/user {_AUTH}", {"2": _USER}),
    "get_user": (f"curl localhost:3000/api/user/2 {_AUTH}", _USER),
    "update_user": (
        "curl -X PUT localhost:3000/api/user/2 -d '{\"name\":\"pizza dinerx\"}' "
        f"{_JSON} {_AUTH}",
        {"user": {**_USER, "name": "pizza dinerx"}, "token": "tttttt"},
    ),
    "delete_user": (
        f"curl -X DELETE localhost:3000/api/user/2 {_AUTH}",
        {"message": "user deleted"},
    ),
    "list_franchises": (
        "curl 'localhost:3000/api/franchise?page=0&limit=10&name=*'",
        {"franchises": [{"id": 4, "name": "topSpot", "stores": []}], "more": False},
    ),
    "get_menu": (
        "curl localhost:3000/api/order/menu",
        [
            {
                "id": 1,
                "title": "Veggie",
                "image": "pizza1.png",
                "price": 0.0038,
                "description": "A garden of delight",
            }
        ],
    ),
    "create_order": (
        "curl -X POST localhost:3000/api/order -d '{\"franchiseId\": 2, \"storeId\": 4, "
        "\"items\":[{\"menuId\": 1, \"description\": \"Veggie\", \"price\": 0.0038}]}' "
        f"{_JSON} {_AUTH}",
        {"order": {"franchiseId": 2, "storeId": 4, "id": 1}, "jwt": "1111111111"},
    ),
    "order_history": (
        f"curl localhost:3000/api/order {_AUTH}",
        {"dinerId": "2", "orders": [], "page": 1},
    ),
    "verify_order": (
        "curl -X POST localhost:3000/api/order/verify -d '{\"jwt\":\"1111111111\"}' "
        f"{_JSON}",
        {"message": "valid", "payload": {"order": {"id": 1}}},
    ),
    "docs": ("curl localhost:3000/api/docs", {"version": API_VERSION, "endpoints": []}),
}


# =====================================================================
# Helper Functions
# =====================================================================


def _backend() -> UserTestBackend:
    return current_app.extensions[EXTENSION_KEY]


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _extract_bearer_token() -> str | None:
    """
    Extract the Bearer token from the current request's Authorization header.

    The scheme is matched case-sensitively, like the stored tokens.

    Returns:
        The raw token string, or ``None`` if the header is absent,
        malformed, or empty after stripping whitespace.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:].strip()
    return token or None


# =====================================================================
# Authentication
# =====================================================================


@api_bp.route("/auth", methods=["POST"])
def register() -> Response:
    """Register a new user."""
    data = _json_body()
    return jsonify(
        _backend().register(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            roles=data.get("roles"),
        )
    )


@api_bp.route("/auth", methods=["PUT"])
def login() -> Response:
    """Login existing user."""
    data = _json_body()
    return jsonify(_backend().login(data.get("email"), data.get("password")))


@api_bp.route("/auth", methods=["DELETE"])
def logout() -> Response:
    """Logout a user."""
    return jsonify(_backend().logout(_extract_bearer_token()))


# =====================================================================
# Users
# =====================================================================


@api_bp.route("/user/me", methods=["GET"])
def get_me() -> Response:
    """Get authenticated user."""
    return jsonify(_backend().resolve_current_user(_extract_bearer_token()))


@api_bp.route("/user", methods=["GET"])
def list_users() -> Response:
    """Gets a list of users."""
    return jsonify(_backend().list_users())


@api_bp.route("/user/<user_id>", methods=["GET"])
def get_user(user_id: str) -> Response:
    """Get a user by id."""
    return jsonify(_backend().get_user(user_id))


@api_bp.route("/user/<user_id>", methods=["PUT"])
def update_user(user_id: str) -> Response:
    """Update user."""
    data = _json_body()
    return jsonify(
        _backend().update_user(
            user_id,
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
        )
    )


@api_bp.route("/user/<user_id>", methods=["DELETE"])
def delete_user(user_id: str) -> Response:
    """Delete user."""
    return jsonify(_backend().delete_user(user_id))


# =====================================================================
# Franchises & Orders
# =====================================================================


@api_bp.route("/franchise", methods=["GET"])
def list_franchises() -> Response:
    """List all the franchises."""
    # Paging and name filters are accepted but the listing is fixed
    return jsonify(_backend().list_franchises())


@api_bp.route("/order/menu", methods=["GET"])
def get_menu() -> Response:
    """Get the pizza menu."""
    return jsonify(_backend().menu())


@api_bp.route("/order", methods=["POST"])
def create_order() -> Response:
    """Create an order for the authenticated user."""
    return jsonify(_backend().create_order(_json_body(), _extract_bearer_token()))


@api_bp.route("/order", methods=["GET"])
def order_history() -> Response:
    """Get the orders for the authenticated user."""
    return jsonify(_backend().order_history(_extract_bearer_token()))


@api_bp.route("/order/verify", methods=["POST"])
def verify_order() -> Response:
    """Verify a pizza JWT."""
    return jsonify(_backend().verify_order(_json_body().get("jwt")))


@api_bp.route("/docs", methods=["GET"])
def docs() -> Response:
    """
    Describe every endpoint of this blueprint.

    The listing is built from the registered URL rules, so it can never
    drift from the routes actually served.
    """
    endpoints = []
    prefix = f"{api_bp.name}."
    for rule in current_app.url_map.iter_rules():
        if not rule.endpoint.startswith(prefix):
            continue
        view_name = rule.endpoint[len(prefix):]
        view = current_app.view_functions[rule.endpoint]
        description = (view.__doc__ or "").strip().splitlines()[0] if view.__doc__ else ""
        example, sample_response = DOC_EXAMPLES.get(view_name, ("", None))
        for method in sorted(rule.methods - {"HEAD", "OPTIONS"}):
            endpoints.append(
                {
                    "method": method,
                    "path": rule.rule,
                    "description": description,
                    "example": example,
                    "response": sample_response,
                    "requiresAuth": view_name in AUTHENTICATED_VIEWS,
                }
            )
    return jsonify({"version": API_VERSION, "endpoints": endpoints})
