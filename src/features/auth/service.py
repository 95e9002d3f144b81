"""Authentication service layer."""

import logging

from jwt.exceptions import InvalidTokenError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.base import utcnow
from src.features.user.schemas import UserPublic
from src.features.user.service import UserService

from .exceptions import (
    AuthException,
    AuthInternalError,
    InvalidCredentialsException,
    InvalidRefreshTokenException,
    RegistrationFailedException,
)
from .issuer import TokenIssuer
from .jwt_utils import REFRESH_TOKEN_TYPE, decode_token, hash_token, verify_token_type
from .password import DUMMY_PASSWORD_HASH, hash_password, verify_password
from .schemas import AuthResponse, MessageResponse, TokenResponse
from .store import RefreshTokenStore

logger = logging.getLogger(__name__)


class AuthService:
    """Service for registration, login and refresh token rotation.

    Stateless: every bit of session state lives in the refresh_tokens table.
    Callers commit the session after a successful call and roll it back when
    one of the typed exceptions is raised.
    """

    @staticmethod
    async def register(
        session: AsyncSession, email: str, password: str, first_name: str, last_name: str
    ) -> AuthResponse:
        """Register a new user and issue their first token pair.

        Args:
            session: Database session
            email: Email address
            password: Plain text password
            first_name: Given name
            last_name: Family name

        Returns:
            AuthResponse with tokens and public user fields

        Raises:
            RegistrationFailedException: If the email is already registered
            AuthInternalError: If the store fails

        """
        try:
            existing = await UserService.get_user_by_email(session, email)
            if existing:
                # Same message as any other failure so the email stays unconfirmed
                logger.info("Registration rejected for an existing email")
                raise RegistrationFailedException()

            user = await UserService.create_user(
                session,
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
            )
            tokens = await TokenIssuer.issue(session, user.id)
        except AuthException:
            raise
        except IntegrityError as err:
            # Lost a race against a concurrent registration of the same email
            logger.info("Registration rejected by unique email constraint")
            raise RegistrationFailedException() from err
        except SQLAlchemyError as err:
            logger.exception("Error registering user")
            raise AuthInternalError() from err

        return AuthResponse(**tokens.model_dump(), user=UserPublic.model_validate(user))

    @staticmethod
    async def login(session: AsyncSession, email: str, password: str) -> AuthResponse:
        """Authenticate with email and password.

        The password is always verified, against a dummy hash when the email
        is unknown, so both failure modes take the same time and produce the
        same error.

        Raises:
            InvalidCredentialsException: If the email is unknown or the password is wrong
            AuthInternalError: If the store fails

        """
        try:
            user = await UserService.get_user_by_email(session, email)

            password_hash = user.password_hash if user else DUMMY_PASSWORD_HASH
            is_valid_password = verify_password(password, password_hash)

            if user is None or not is_valid_password:
                logger.info("Failed login attempt")
                raise InvalidCredentialsException()

            await UserService.record_login(session, user, utcnow())
            tokens = await TokenIssuer.issue(session, user.id)
        except AuthException:
            raise
        except SQLAlchemyError as err:
            logger.exception("Error logging in user")
            raise AuthInternalError() from err

        logger.info(f"User logged in: {user.id}")
        return AuthResponse(**tokens.model_dump(), user=UserPublic.model_validate(user))

    @staticmethod
    async def refresh_token(session: AsyncSession, refresh_token: str) -> TokenResponse:
        """Exchange a refresh token for a new pair, revoking the old one.

        The revoke is a compare-and-swap on ``revoked_at``: of two concurrent
        calls with the same token exactly one gets a new pair. Not found,
        already revoked and expired are reported identically.

        Raises:
            InvalidRefreshTokenException: For any invalid token

        """
        try:
            payload = decode_token(refresh_token)
        except InvalidTokenError as err:
            raise InvalidRefreshTokenException() from err

        if not verify_token_type(payload, REFRESH_TOKEN_TYPE) or not payload.get("userId"):
            raise InvalidRefreshTokenException()

        try:
            store = RefreshTokenStore(session)
            user_id = await store.revoke_if_active(hash_token(refresh_token), utcnow())
            if user_id is None:
                raise InvalidRefreshTokenException()

            tokens = await TokenIssuer.issue(session, user_id)
        except InvalidRefreshTokenException:
            raise
        except Exception as err:
            logger.exception("Error refreshing token")
            raise InvalidRefreshTokenException() from err

        logger.info(f"Refresh token rotated for user {user_id}")
        return tokens

    @staticmethod
    async def logout(session: AsyncSession, refresh_token: str) -> MessageResponse:
        """Revoke a refresh token.

        Raises:
            InvalidRefreshTokenException: If no active row matches

        """
        try:
            store = RefreshTokenStore(session)
            user_id = await store.revoke_if_active(hash_token(refresh_token), utcnow())
        except SQLAlchemyError as err:
            logger.exception("Error logging out")
            raise InvalidRefreshTokenException() from err

        if user_id is None:
            raise InvalidRefreshTokenException()

        logger.info(f"User logged out: {user_id}")
        return MessageResponse(message="Successfully logged out")
