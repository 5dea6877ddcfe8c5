from abc import ABC
from enum import StrEnum


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when a request is not backed by a valid session.

    `redirect_to` is the entry point the client should go to in order to log in.
    """

    def __init__(self, message: str = "Authentication failed", redirect_to: str | None = None) -> None:
        super().__init__(message)
        self.redirect_to = redirect_to


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""


class ValidationError(UserError):
    """Raised when user input fails validation."""


class DuplicateError(UserError):
    """Raised when a value that must be unique already exists."""


class UploadError(UserError):
    """Raised when the media host rejects or fails an upload."""

    def __init__(self, message: str = "Upload Error") -> None:
        super().__init__(message)


class AuthErrorKind(StrEnum):
    """Failure kinds of registration and login."""

    PASSWORD_MISMATCH = "password_mismatch"
    USER_NAME_TAKEN = "user_name_taken"
    REGISTRATION_FAILED = "registration_failed"
    USER_NOT_FOUND = "user_not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    HISTORY_UPDATE_FAILED = "history_update_failed"


class AuthError(UserError):
    """Registration or login failure.

    Callers match on `kind`. `user_name` is the submitted name, echoed back so
    the client can redisplay its form.
    """

    def __init__(self, kind: AuthErrorKind, message: str, user_name: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.user_name = user_name
