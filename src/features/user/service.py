"""User service layer (user store used by authentication)."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.base import utcnow

from .models import User

logger = logging.getLogger(__name__)


class UserService:
    """Lookup and persistence operations for users."""

    @staticmethod
    async def get_user(session: AsyncSession, user_id: str) -> User | None:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
        """Get user by email (exact, case-sensitive match)."""
        stmt = select(User).where(User.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create_user(
        session: AsyncSession, email: str, password_hash: str, first_name: str, last_name: str
    ) -> User:
        """Create a new user row.

        Args:
            session: Database session
            email: Email address, stored as given
            password_hash: Already-hashed password
            first_name: Given name
            last_name: Family name

        Returns:
            Created User object with its generated id

        Raises:
            IntegrityError: If the email is already taken (unique index)

        """
        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
        )
        session.add(user)
        await session.flush()
        logger.info(f"New user registered: {user.id}")
        return user

    @staticmethod
    async def record_login(session: AsyncSession, user: User, when: datetime | None = None) -> User:
        """Set last_login_at for a successful login."""
        user.last_login_at = when or utcnow()
        await session.flush()
        return user
