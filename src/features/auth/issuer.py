"""Token pair issuance."""

import logging
from datetime import timedelta

from jwt.exceptions import PyJWTError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.database.base import utcnow

from .exceptions import AuthInternalError
from .jwt_utils import create_access_token, create_refresh_token, hash_token
from .schemas import TokenResponse
from .store import RefreshTokenStore

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Mints access/refresh token pairs."""

    @staticmethod
    async def issue(session: AsyncSession, user_id: str) -> TokenResponse:
        """Create a token pair for a user and persist the refresh token's hash.

        The only write is one refresh_tokens insert; users are not touched.

        Args:
            session: Database session
            user_id: Owner of the new tokens

        Returns:
            TokenResponse with access token, refresh token and expiry

        Raises:
            AuthInternalError: If signing or the insert fails

        """
        now = utcnow()
        refresh_expires_at = now + timedelta(days=settings.refresh_token_expire_days)

        try:
            access_token = create_access_token(user_id, now=now)
            refresh_token = create_refresh_token(user_id, now=now)

            store = RefreshTokenStore(session)
            await store.insert(user_id, hash_token(refresh_token), refresh_expires_at)
        except (PyJWTError, SQLAlchemyError) as err:
            logger.exception(f"Failed to issue tokens for user {user_id}")
            raise AuthInternalError() from err

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.access_token_expire_seconds,
        )
