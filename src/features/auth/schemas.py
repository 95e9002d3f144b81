"""Authentication schemas (DTOs)."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.features.user.schemas import UserPublic
from src.shared.validators.password import validate_password_strength


# Request schemas
class RegisterRequest(BaseModel):
    """Registration request.

    Note: Uses email-validator library via Pydantic's EmailStr for RFC 5322 compliant email validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr = Field(..., description="Email address (validated via email-validator)")
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (8-128 characters, must include lowercase, uppercase, digit and special character)",
    )
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=255)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=255)

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        """Validate password strength using shared validator."""
        return validate_password_strength(value)


class LoginRequest(BaseModel):
    """Login request."""

    email: EmailStr
    # Strength is not re-checked at login; any mismatch is just invalid_credentials
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(BaseModel):
    """Refresh token request (used by refresh and logout)."""

    refresh_token: str = Field(..., min_length=1)


# Response schemas
class TokenResponse(BaseModel):
    """JWT token pair response."""

    access_token: str
    refresh_token: str
    expires_in: int  # seconds
    token_type: str = "Bearer"


class AuthResponse(TokenResponse):
    """Token pair plus the public fields of the authenticated user."""

    user: UserPublic


class MessageResponse(BaseModel):
    message: str
