"""Authentication router (JWT token management endpoints)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session

from .schemas import AuthResponse, LoginRequest, MessageResponse, RefreshTokenRequest, RegisterRequest, TokenResponse
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse)
async def register(data: RegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new account and get JWT tokens.

    - **email**: Email address
    - **password**: 8-128 characters with lowercase, uppercase, digit and one of `@$!%*?&`
    - **firstName** / **lastName**: Non-empty names

    Returns access_token, refresh_token and the public user fields.
    """
    result = await AuthService.register(session, data.email, data.password, data.first_name, data.last_name)
    await session.commit()
    return result


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login and get JWT tokens.

    Unknown email and wrong password both answer 401 `invalid_credentials`.
    """
    result = await AuthService.login(session, data.email, data.password)
    await session.commit()
    return result


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(data: RefreshTokenRequest, session: AsyncSession = Depends(get_db_session)):
    """Rotate a refresh token.

    - **refresh_token**: Valid refresh token

    Returns a new access_token and refresh_token; the presented token stops working.
    """
    tokens = await AuthService.refresh_token(session, data.refresh_token)
    await session.commit()
    return tokens


@router.post("/logout", response_model=MessageResponse)
async def logout(data: RefreshTokenRequest, session: AsyncSession = Depends(get_db_session)):
    """Logout and revoke refresh token.

    - **refresh_token**: Refresh token to revoke
    """
    result = await AuthService.logout(session, data.refresh_token)
    await session.commit()
    return result
