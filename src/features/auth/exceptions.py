"""Authentication exceptions.

Every error leaving the auth feature is one of these classes. Each carries a
stable ``error_code`` and renders as ``{"error", "message", "details"?}``.
"""

from typing import Any

from fastapi import HTTPException, status


class AuthException(HTTPException):
    """Base authentication exception."""

    error_code = "authentication_failed"

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = status.HTTP_401_UNAUTHORIZED,
        details: dict[str, str] | None = None,
    ):
        headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error_code, "message": self.detail}
        if self.details:
            body["details"] = self.details
        return body


class InvalidCredentialsException(AuthException):
    """Raised when the email is unknown or the password is wrong.

    The two cases share one message so responses do not reveal which
    emails are registered.
    """

    error_code = "invalid_credentials"

    def __init__(self):
        super().__init__(detail="Invalid email or password")


class InvalidRefreshTokenException(AuthException):
    """Raised when a refresh token is malformed, unknown, revoked or expired."""

    error_code = "invalid_refresh_token"

    def __init__(self):
        super().__init__(detail="Refresh token is invalid or expired")


class RegistrationFailedException(AuthException):
    """Raised when registration cannot proceed.

    Deliberately vague: an already registered email gets this same message.
    """

    error_code = "registration_failed"

    def __init__(
        self,
        detail: str = "Registration failed. Please try again with different details.",
        details: dict[str, str] | None = None,
    ):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST, details=details)


class InvalidTokenException(AuthException):
    """Raised when an access token is invalid."""

    error_code = "invalid_token"

    def __init__(self, detail: str = "Access token is invalid or expired"):
        super().__init__(detail=detail)


class TokenExpiredException(InvalidTokenException):
    """Raised when an access token has expired."""

    error_code = "token_expired"

    def __init__(self):
        super().__init__(detail="Access token has expired")


class AuthInternalError(AuthException):
    """Raised when the store or signing layer fails unexpectedly.

    The underlying exception is logged server-side and never returned.
    """

    error_code = "internal_error"

    def __init__(self):
        super().__init__(
            detail="An internal error occurred. Please try again later.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
