"""User schemas (DTOs)."""

from datetime import datetime

from pydantic import BaseModel


class UserPublic(BaseModel):
    """Public user fields returned alongside issued tokens."""

    id: str
    email: str
    first_name: str
    last_name: str

    model_config = {"from_attributes": True}


class UserProfileResponse(UserPublic):
    """Profile of the authenticated user."""

    created_at: datetime
    last_login_at: datetime | None = None
