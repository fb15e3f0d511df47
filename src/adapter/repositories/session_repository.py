from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select, update

from src.adapter.repositories.base import SqlModelRepository
from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import RefreshSession


class SessionRepository(SqlModelRepository[RefreshSession], ISessionRepository):
    """RefreshSession repository implementation using SQLModel"""

    async def create(self, session_obj: RefreshSession) -> RefreshSession:
        """Create a new session"""
        return await self._save(session_obj)

    async def update(self, session_obj: RefreshSession) -> RefreshSession:
        """Update existing session"""
        return await self._save(session_obj)

    async def get_by_token_hash(
        self, token_hash: str, user_id: Optional[UUID] = None
    ) -> Optional[RefreshSession]:
        stmt = select(RefreshSession).where(RefreshSession.token_hash == token_hash)
        if user_id is not None:
            stmt = stmt.where(RefreshSession.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def revoke_by_token_hash(
        self, token_hash: str, now: datetime, user_id: Optional[UUID] = None
    ) -> bool:
        stmt = (
            update(RefreshSession)
            .where(
                RefreshSession.token_hash == token_hash,
                RefreshSession.revoked == False,  # noqa: E712
            )
            .values(revoked=True, revoked_at=now)
        )
        if user_id is not None:
            stmt = stmt.where(RefreshSession.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke all active sessions for a user"""
        stmt = (
            update(RefreshSession)
            .where(
                RefreshSession.user_id == user_id,
                RefreshSession.revoked == False,  # noqa: E712
            )
            .values(revoked=True, revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired_for_user(self, user_id: UUID, now: datetime) -> int:
        stmt = delete(RefreshSession).where(
            RefreshSession.user_id == user_id,
            RefreshSession.expires_at < now,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(RefreshSession).where(RefreshSession.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
