"""Authentication dependencies for FastAPI."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.user.models import User
from src.features.user.service import UserService

from .exceptions import InvalidTokenException, TokenExpiredException
from .jwt_utils import REFRESH_TOKEN_TYPE, decode_token, verify_token_type

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Get the current authenticated user from a bearer access token.

    Access tokens are stateless: only the signature and ``exp`` are checked,
    then the user row is loaded.

    Args:
        credentials: HTTP authorization credentials with bearer token
        session: Database session

    Returns:
        User object

    Raises:
        TokenExpiredException: If the access token has expired
        InvalidTokenException: If the token is missing, invalid, or names no user

    """
    if credentials is None:
        raise InvalidTokenException(detail="Authentication required")

    try:
        payload = decode_token(credentials.credentials)
    except ExpiredSignatureError as err:
        raise TokenExpiredException() from err
    except InvalidTokenError as err:
        raise InvalidTokenException() from err

    # A refresh token must not be usable as an access token
    if verify_token_type(payload, REFRESH_TOKEN_TYPE):
        raise InvalidTokenException(detail="Invalid token type")

    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidTokenException(detail="Invalid token payload")

    user = await UserService.get_user(session, user_id)
    if user is None:
        raise InvalidTokenException(detail="User not found")

    return user
