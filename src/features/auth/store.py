"""Refresh token store.

The ledger of issued refresh tokens. Rows move one way:
Active -> Revoked (logout or rotation), any -> Expired (time), Expired -> Deleted
(cleanup). Revocation is always a single conditional UPDATE, so two callers
presenting the same token can never both revoke it.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import RefreshToken


@dataclass(frozen=True)
class TokenStatistics:
    total: int
    expired: int
    revoked: int
    active: int


class RefreshTokenStore:
    """Database operations on the refresh_tokens table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, user_id: str, token_hash: str, expires_at: datetime) -> RefreshToken:
        """Store a new refresh token row.

        Raises:
            IntegrityError: If ``token_hash`` is already present

        """
        model = RefreshToken(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
        self._session.add(model)
        await self._session.flush()
        return model

    async def get_by_hash(self, token_hash: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def revoke_if_active(self, token_hash: str, now: datetime) -> str | None:
        """Revoke the row iff it is currently active.

        Args:
            token_hash: Hash of the presented refresh token
            now: Revocation time, also the reference for expiry

        Returns:
            The ``user_id`` of the consumed row, or None when no active row matched

        """
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.token_hash == token_hash,
                RefreshToken.revoked_at.is_(None),
                RefreshToken.expires_at > now,
            )
            .values(revoked_at=now)
            .returning(RefreshToken.user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_expired(self, now: datetime) -> int:
        """Delete every row past its expiry, revoked or not."""
        stmt = delete(RefreshToken).where(RefreshToken.expires_at < now).execution_options(synchronize_session=False)
        result = await self._session.execute(stmt)
        return result.rowcount

    async def delete_revoked_expired(self, now: datetime) -> int:
        """Delete rows that are both revoked and past expiry."""
        stmt = (
            delete(RefreshToken)
            .where(RefreshToken.revoked_at.is_not(None), RefreshToken.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def statistics(self, now: datetime) -> TokenStatistics:
        """Count rows by lifecycle state."""
        expired = RefreshToken.expires_at < now
        revoked = RefreshToken.revoked_at.is_not(None)
        active = RefreshToken.revoked_at.is_(None) & (RefreshToken.expires_at > now)
        stmt = select(
            func.count(RefreshToken.id),
            func.count(RefreshToken.id).filter(expired),
            func.count(RefreshToken.id).filter(revoked),
            func.count(RefreshToken.id).filter(active),
        )
        row = (await self._session.execute(stmt)).one()
        return TokenStatistics(total=row[0], expired=row[1], revoked=row[2], active=row[3])
