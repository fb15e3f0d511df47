from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import RefreshSession


class ISessionRepository(ABC):
    """RefreshSession repository interface - application layer"""

    @abstractmethod
    async def create(self, session: RefreshSession) -> RefreshSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, session: RefreshSession) -> RefreshSession:
        """Update existing session"""
        pass

    @abstractmethod
    async def get_by_token_hash(
        self, token_hash: str, user_id: Optional[UUID] = None
    ) -> Optional[RefreshSession]:
        """Find a session by refresh-token digest, optionally scoped to a user"""
        pass

    @abstractmethod
    async def revoke_by_token_hash(
        self, token_hash: str, now: datetime, user_id: Optional[UUID] = None
    ) -> bool:
        """Revoke the matching non-revoked session. Returns True if one was revoked."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke all sessions for a user. Returns count of revoked sessions."""
        pass

    @abstractmethod
    async def delete_expired_for_user(self, user_id: UUID, now: datetime) -> int:
        """Delete this user's expired sessions. Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every expired session. Returns count."""
        pass
