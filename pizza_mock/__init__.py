"""
Mock pizza backend application factory.

Provides the ``create_app`` factory that wraps a
:class:`~pizza_mock.backend.UserTestBackend` in a Flask application.  The
same application serves two callers: Playwright route interception, which
replays intercepted browser requests into it in-process, and ``wsgi.py``,
which runs it as a standalone server for storefront development.

Key Concepts Demonstrated:
- Application factory pattern (create_app)
- Explicitly injected per-test state instead of module globals
- Blueprint-based route registration
- Centralised error-to-JSON translation
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, request

from config import get_config

from .backend import UserTestBackend
from .errors import MockBackendError
from .state import create_initial_state

# Key under which the backend instance is stored in ``app.extensions``
EXTENSION_KEY = "pizza_mock"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _handle_backend_error(error: MockBackendError) -> tuple[Response, int]:
    """Render a backend failure as ``{"message": ...}`` with its status code."""
    return jsonify(error.to_dict()), error.status_code


def _allow_storefront_origin(response: Response) -> Response:
    """Let the storefront origin read responses when served cross-origin."""
    origin = request.headers.get("Origin")
    if origin:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
    return response


def create_app(
    backend: UserTestBackend | None = None, config_name: str | None = None
) -> Flask:
    """
    Create and configure the mock backend Flask application.

    Args:
        backend: The backend whose state the routes read and mutate.  When
            ``None`` a fresh backend seeded from configuration is built,
            which is what the standalone server wants.
        config_name: Configuration environment name.  If None, uses the
            FLASK_ENV environment variable.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating mock backend app with config: %s", config_class.__name__)

    if backend is None:
        backend = UserTestBackend(
            create_initial_state(config_class),
            pizza_secret=config_class.PIZZA_JWT_SECRET,
        )
    app.extensions[EXTENSION_KEY] = backend

    # Import inside the factory; the blueprint module looks the backend up
    # through EXTENSION_KEY defined above.
    from .routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_error_handler(MockBackendError, _handle_backend_error)
    app.after_request(_allow_storefront_origin)

    return app
