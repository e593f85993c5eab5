"""
Typed failures raised by the user service and the persistence gateway.

Every error carries an ErrorKind so the HTTP boundary can map it to a status
code without looking at message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION_FAILURE = "validation_failure"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


class UserError(Exception):
    """Base class for user-related exceptions."""

    kind: ErrorKind = ErrorKind.VALIDATION_FAILURE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"detail": self.message, "error": self.kind.value}


class UserNotFoundError(UserError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, user_id: int | None = None, *, email: str | None = None):
        if email is not None:
            message = f"User not found with email: {email}"
        else:
            message = f"User not found with id: {user_id}"
        super().__init__(message)
        self.user_id = user_id
        self.email = email


class UserValidationError(UserError):
    """Raised when input passes schema validation but breaks a domain rule."""

    kind = ErrorKind.VALIDATION_FAILURE

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DuplicateEmailError(UserError):
    kind = ErrorKind.CONFLICT

    def __init__(self, email: str):
        super().__init__(f"Email already exists: {email}")
        self.email = email


class StoreUnavailableError(UserError):
    """The backing store could not be reached; never retried here."""

    kind = ErrorKind.UNAVAILABLE

    def __init__(self, operation: str, reason: str | None = None):
        message = f"User store unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.operation = operation
