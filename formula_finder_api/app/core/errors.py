"""
Typed errors raised by the action handlers.

Every failure a caller can act upon is one of four kinds.  Services
raise them directly; ``main.create_app`` registers a handler that
turns any ``ActionError`` into the uniform error envelope::

    {"success": false, "error": {"code": "FORBIDDEN", "message": "..."}}

Store failures (``sqlite3.Error``) are deliberately not wrapped.
"""

from fastapi import status


class ActionError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Action failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": {"code": self.code, "message": self.message},
        }


class UnauthorizedError(ActionError):
    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "You must be signed in to perform this action."


class NotFoundError(ActionError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class ForbiddenError(ActionError):
    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have access to this resource."


class ValidationFailedError(ActionError):
    code = "BAD_REQUEST"
    status_code = 422
    default_message = "Invalid input."
