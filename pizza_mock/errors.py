"""
Error types raised by the mock pizza backend.

Only three failures are modelled.  Each carries the HTTP status code and
the ``message`` the real pizza service would put in its JSON body, so the
Flask error handler can relay them without a lookup table.
"""

from __future__ import annotations


class MockBackendError(Exception):
    """Base class for failures a backend operation reports to its caller."""

    status_code: int = 500
    message: str = "internal error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message}


class Unauthorized(MockBackendError):
    """Login credentials did not match a stored user."""

    status_code = 401
    message = "Unauthorized"


class NotFound(MockBackendError):
    """An operation addressed a user id that is not stored."""

    status_code = 404
    message = "user not found"


class InvalidPizza(MockBackendError):
    """A pizza JWT failed signature or format verification."""

    status_code = 400
    message = "invalid"
