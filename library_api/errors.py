"""
Error Kinds

Every failure the API reports to a caller carries a machine-readable code.
GraphQL-facing errors subclass LibraryError; graphql-core copies their
``extensions`` dict into the error document, so a client sees e.g.:

    {
        "message": "wrong credentials",
        "extensions": {"code": "BAD_USER_INPUT", "invalidArgs": {...}}
    }

ValidationError is raised by the stores and never reaches a client
directly: resolvers re-wrap it as InvalidInput.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Codes reported in the ``extensions.code`` field."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    BAD_USER_INPUT = "BAD_USER_INPUT"
    INVALID_TOKEN = "INVALID_TOKEN"


class LibraryError(Exception):
    """Base class for errors reported to API callers."""

    code: ErrorCode = ErrorCode.BAD_USER_INPUT
    status_code: int = 400

    def __init__(self, message: str, invalid_args: Any = None):
        super().__init__(message)
        self.message = message
        self.invalid_args = invalid_args
        self.extensions: dict[str, Any] = {"code": self.code.value}
        if invalid_args is not None:
            self.extensions["invalidArgs"] = invalid_args

    def to_graphql(self) -> dict[str, Any]:
        """Render as a single entry of a GraphQL ``errors`` list."""
        return {"message": self.message, "extensions": self.extensions}


class Unauthenticated(LibraryError):
    """A gated mutation was called without a current user."""

    code = ErrorCode.UNAUTHENTICATED
    status_code = 401

    def __init__(self, message: str = "not authenticated"):
        super().__init__(message)


class InvalidInput(LibraryError):
    """Bad field values, an unknown referenced entity, or rejected credentials."""

    code = ErrorCode.BAD_USER_INPUT


class InvalidTokenError(LibraryError):
    """The bearer token is malformed or its signature does not verify."""

    code = ErrorCode.INVALID_TOKEN
    status_code = 401

    def __init__(self, message: str = "invalid token"):
        super().__init__(message)


class ValidationError(Exception):
    """
    Raised by the stores when a record fails validation.

    Attributes:
        errors: Human-readable messages, one per failed rule
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or [message]
