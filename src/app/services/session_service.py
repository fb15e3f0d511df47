"""
Session Service

Server-side record of issued refresh tokens. Only the SHA-256 digest of a
token is stored; a refresh token is usable only while its row exists,
is not revoked and is not expired.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from src.api.utils.jwt import TokenPayload, verify_refresh_token
from src.app.services.clock import IClock
from src.app.services.unit_of_work import UnitOfWork
from src.app.utils.credentials import hash_refresh_token
from src.domain.entities import RefreshSession
from src.domain.errors import TokenError

logger = logging.getLogger(__name__)


class SessionService:
    """
    Session Store.

    Business Rules:
    - Storing a session first deletes the user's expired sessions
    - Validation needs a valid refresh JWT whose user_id matches the
      expected user, plus a live row for its digest
    - Revocation is idempotent and never deletes rows
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: IClock,
        refresh_ttl: timedelta = timedelta(days=7),
    ):
        self.uow = uow
        self.clock = clock
        self.refresh_ttl = refresh_ttl

    async def store(
        self,
        user_id: UUID,
        raw_token: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> RefreshSession:
        now = self.clock.now()
        purged = await self.uow.sessions.delete_expired_for_user(user_id, now)
        if purged:
            logger.info(f"Purged {purged} expired session(s) for user {user_id}")

        session = RefreshSession(
            user_id=user_id,
            token_hash=hash_refresh_token(raw_token),
            revoked=False,
            ip_address=ip_address,
            user_agent=user_agent[:500] if user_agent else None,
            expires_at=now + self.refresh_ttl,
            last_used_at=now,
            created_at=now,
        )
        return await self.uow.sessions.create(session)

    async def validate(
        self, raw_token: str, expected_user_id: Optional[UUID] = None
    ) -> Optional[TokenPayload]:
        """
        Check a refresh token against its signature and the session table.

        Args:
            raw_token: Refresh JWT as presented by the client
            expected_user_id: When given, the token must belong to this user

        Returns:
            The token's identity claims, or None if the token is not usable
        """
        try:
            payload = verify_refresh_token(raw_token)
        except TokenError:
            return None

        try:
            token_user_id = UUID(payload.user_id)
        except ValueError:
            return None

        if expected_user_id is not None and token_user_id != expected_user_id:
            return None

        session = await self.uow.sessions.get_by_token_hash(
            hash_refresh_token(raw_token), user_id=token_user_id
        )
        if session is None or session.revoked:
            return None

        now = self.clock.now()
        if session.expires_at < now:
            return None

        session.last_used_at = now
        await self.uow.sessions.update(session)
        return payload

    async def revoke(self, raw_token: str, user_id: Optional[UUID] = None) -> bool:
        """Revoke the session for a token; False if none was live."""
        return await self.uow.sessions.revoke_by_token_hash(
            hash_refresh_token(raw_token), self.clock.now(), user_id=user_id
        )

    async def revoke_all(self, user_id: UUID) -> int:
        count = await self.uow.sessions.revoke_all_by_user_id(user_id, self.clock.now())
        logger.info(f"Revoked {count} session(s) for user {user_id}")
        return count

    async def purge_expired(self) -> int:
        count = await self.uow.sessions.delete_expired(self.clock.now())
        if count:
            logger.info(f"Deleted {count} expired session(s)")
        return count
