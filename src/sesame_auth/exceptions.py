"""Authentication exceptions and error codes.

All errors raised by sesame_auth derive from SesameError so the
presentation layer can map them to responses in one place. The error
codes are part of the public API contract and should not be changed.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients."""

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict Errors (409)
    CONFLICT = "CONFLICT"
    USERNAME_TAKEN = "USERNAME_TAKEN"
    EMAIL_TAKEN = "EMAIL_TAKEN"

    # Not Found Errors (404)
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"

    # Authentication Errors (401)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Token Errors (401)
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    MALFORMED_CLAIMS = "MALFORMED_CLAIMS"
    UNKNOWN_SUBJECT = "UNKNOWN_SUBJECT"

    # Store Errors (503)
    STORE_TIMEOUT = "STORE_TIMEOUT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"

    # General Errors (500)
    CONFIG_ERROR = "CONFIG_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SesameError(Exception):
    """Base exception for all sesame errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(SesameError):
    """Raised when registration or lookup input is malformed."""

    default_code = ErrorCode.VALIDATION_ERROR


class ConflictError(SesameError):
    """Raised when a username or email is already registered."""

    default_code = ErrorCode.CONFLICT


class NotFoundError(SesameError):
    """Raised when a looked-up account does not exist."""

    default_code = ErrorCode.ACCOUNT_NOT_FOUND


class AuthError(SesameError):
    """Raised when email or password is incorrect during authentication."""

    default_code = ErrorCode.INVALID_CREDENTIALS

    def __init__(
        self,
        message: str = "invalid email or password",
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class TokenError(SesameError):
    """Raised when a token is forged, expired, or carries malformed claims.

    Not user-correctable: the caller has to authenticate again.
    """

    default_code = ErrorCode.INVALID_SIGNATURE


class StoreError(SesameError):
    """Raised when the backing store fails or does not answer in time."""

    default_code = ErrorCode.STORE_UNAVAILABLE

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = True,
    ):
        super().__init__(message, code, details)
        self.retryable = retryable


class ConfigError(SesameError):
    """Raised at startup when a required secret or setting is missing."""

    default_code = ErrorCode.CONFIG_ERROR
