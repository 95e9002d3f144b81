"""Tests for the refresh token cleanup job."""

from datetime import timedelta

from sqlalchemy import select

from src.database.base import utcnow
from src.features.auth.cleanup import TokenCleanupJob
from src.features.auth.models import RefreshToken
from src.features.auth.store import RefreshTokenStore


async def seed_tokens(session, user_id: str) -> None:
    """One row in each lifecycle state."""
    now = utcnow()
    store = RefreshTokenStore(session)
    await store.insert(user_id, "active".ljust(64, "0"), now + timedelta(days=10))
    revoked = await store.insert(user_id, "revoked".ljust(64, "0"), now + timedelta(days=10))
    await store.insert(user_id, "expired".ljust(64, "0"), now - timedelta(days=1))
    revoked_expired = await store.insert(user_id, "revoked-expired".ljust(64, "0"), now - timedelta(days=1))
    revoked.revoked_at = now
    revoked_expired.revoked_at = now - timedelta(days=2)
    await session.commit()


async def remaining_hashes(session) -> set[str]:
    result = await session.execute(select(RefreshToken.token_hash))
    return {h.rstrip("0") for h in result.scalars().all()}


class TestTokenCleanupJob:
    async def test_run_once_removes_expired_rows(self, session, session_factory, make_user):
        user = await make_user()
        await seed_tokens(session, user.id)

        result = await TokenCleanupJob(session_factory).run_once()

        assert result.total_removed == 2
        assert result.remaining == 2
        assert result.active == 1
        assert await remaining_hashes(session) == {"active", "revoked"}

    async def test_never_deletes_active_rows(self, session, session_factory, make_user):
        user = await make_user()
        await RefreshTokenStore(session).insert(user.id, "f" * 64, utcnow() + timedelta(seconds=30))
        await session.commit()

        job = TokenCleanupJob(session_factory)
        assert await job.cleanup_expired_tokens() == 0
        assert await job.cleanup_revoked_tokens() == 0
        assert (await job.run_once()).active == 1

    async def test_cleanup_revoked_only_removes_revoked_and_expired(self, session, session_factory, make_user):
        user = await make_user()
        await seed_tokens(session, user.id)

        removed = await TokenCleanupJob(session_factory).cleanup_revoked_tokens()

        assert removed == 1
        assert await remaining_hashes(session) == {"active", "revoked", "expired"}

    async def test_cleanup_expired_removes_revoked_and_unrevoked(self, session, session_factory, make_user):
        user = await make_user()
        await seed_tokens(session, user.id)

        removed = await TokenCleanupJob(session_factory).cleanup_expired_tokens()

        assert removed == 2
        assert await remaining_hashes(session) == {"active", "revoked"}

    async def test_statistics(self, session, session_factory, make_user):
        user = await make_user()
        await seed_tokens(session, user.id)

        stats = await TokenCleanupJob(session_factory).get_token_statistics()

        assert stats.total == 4
        assert stats.expired == 2
        assert stats.revoked == 2
        assert stats.active == 1

    async def test_empty_table(self, session_factory):
        result = await TokenCleanupJob(session_factory).run_once()

        assert result.total_removed == 0
        assert result.remaining == 0
