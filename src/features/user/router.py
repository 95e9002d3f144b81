"""User router (API endpoints)."""

from fastapi import APIRouter, Depends

from src.features.auth.dependencies import get_current_user

from .models import User
from .schemas import UserProfileResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile."""
    return UserProfileResponse.model_validate(current_user)
