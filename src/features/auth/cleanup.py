"""Refresh token garbage collection.

Runs out of band (e.g. a daily cron job) and only deletes rows whose expiry
has passed, so it never competes with refresh or logout for an active row.

Usage:
    python -m src.features.auth.cleanup
"""

import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.database.base import utcnow

from .store import RefreshTokenStore, TokenStatistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanupResult:
    expired_removed: int
    revoked_removed: int
    remaining: int
    active: int

    @property
    def total_removed(self) -> int:
        return self.expired_removed + self.revoked_removed


class TokenCleanupJob:
    """Deletes expired and revoked-and-expired refresh tokens."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def cleanup_expired_tokens(self) -> int:
        """Remove every refresh token past its expiry, revoked or not."""
        async with self._session_factory() as session, session.begin():
            removed = await RefreshTokenStore(session).delete_expired(utcnow())
        logger.info(f"Cleaned up {removed} expired refresh tokens")
        return removed

    async def cleanup_revoked_tokens(self) -> int:
        """Remove refresh tokens that are both revoked and expired."""
        async with self._session_factory() as session, session.begin():
            removed = await RefreshTokenStore(session).delete_revoked_expired(utcnow())
        logger.info(f"Cleaned up {removed} revoked and expired refresh tokens")
        return removed

    async def get_token_statistics(self) -> TokenStatistics:
        async with self._session_factory() as session:
            return await RefreshTokenStore(session).statistics(utcnow())

    async def run_once(self) -> CleanupResult:
        """Run both deletions in one transaction and report counts.

        Returns:
            CleanupResult with removed counts and what is left afterwards

        """
        logger.info("Starting refresh token cleanup")
        now = utcnow()

        async with self._session_factory() as session, session.begin():
            store = RefreshTokenStore(session)
            expired_removed = await store.delete_expired(now)
            # Subset of the expired predicate, so usually zero here; counted separately
            revoked_removed = await store.delete_revoked_expired(now)
            stats = await store.statistics(now)

        result = CleanupResult(
            expired_removed=expired_removed,
            revoked_removed=revoked_removed,
            remaining=stats.total,
            active=stats.active,
        )
        logger.info(
            f"Token cleanup complete: removed={result.total_removed} "
            f"remaining={result.remaining} active={result.active}"
        )
        return result


async def main() -> CleanupResult:
    from src.config.logging_config import configure_logging
    from src.database.client import close_db, get_session_factory, init_db

    configure_logging()
    await init_db()
    try:
        return await TokenCleanupJob(get_session_factory()).run_once()
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
