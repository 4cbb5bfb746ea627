"""
Application errors and GraphQL error formatting.

Every error a resolver raises on purpose is an AppError. graphql-core copies
the ``extensions`` dict of the original exception onto the GraphQL error, so
clients get a machine-readable ``code`` and, for input errors, a ``details``
map of field -> explanation.
"""

from typing import Any, Dict, Optional

from ariadne import format_error as default_format_error
from graphql import GraphQLError


class AppError(Exception):
    """Base class for all application exceptions."""
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        self.extensions = {"code": self.code, "details": self.details}
        super().__init__(self.message)


class AuthenticationError(AppError):
    """Missing or invalid session."""
    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Unauthenticated", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InvalidTokenError(AuthenticationError):
    """Token failed verification: bad signature, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class AuthorizationError(AppError):
    """Authenticated, but not the owner of the resource."""
    code = "FORBIDDEN"

    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class UserInputError(AppError):
    code = "BAD_USER_INPUT"

    def __init__(self, message: str = "Invalid input", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class NotFoundError(UserInputError):
    code = "NOT_FOUND"

    def __init__(self, message: str = "Not Found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class DuplicateAccountError(UserInputError):
    def __init__(self, message: str = "Account already exists", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details or {
            "email": "Email address already exists! Try another email."
        })


class AccountNotFoundError(UserInputError):
    def __init__(self, message: str = "Account not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details or {"email": "Email address is incorrect"})


class InvalidCredentialsError(UserInputError):
    def __init__(self, message: str = "Invalid credentials", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details or {"password": "Password is incorrect"})


class IncorrectPasswordError(UserInputError):
    def __init__(self, message: str = "Incorrect Password", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details or {
            "changePassword": "You have provided incorrect old password"
        })


def format_error(error: GraphQLError, debug: bool = False) -> dict:
    """Format a GraphQL error for the response.

    Parse/validation errors and AppErrors go out as-is. Anything else is a
    bug (Ariadne has already logged it with its traceback); outside debug mode
    its message is replaced so internals don't leak to clients.
    """
    formatted = default_format_error(error, debug)
    original = error.original_error
    if original is None or isinstance(original, AppError):
        return formatted

    if not debug:
        formatted["message"] = "Internal server error"
    formatted.setdefault("extensions", {})["code"] = "INTERNAL_SERVER_ERROR"
    return formatted
