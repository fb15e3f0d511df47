from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select, update

from src.adapter.repositories.base import SqlModelRepository
from src.app.repositories.otp_repository import IOTPRepository
from src.domain.entities import OTPChallenge, OTPPurpose


class OTPRepository(SqlModelRepository[OTPChallenge], IOTPRepository):
    """OTPChallenge repository implementation using SQLModel"""

    async def create(self, otp: OTPChallenge) -> OTPChallenge:
        return await self._save(otp)

    async def get_latest_pending(
        self, email: str, purpose: OTPPurpose
    ) -> Optional[OTPChallenge]:
        stmt = (
            select(OTPChallenge)
            .where(
                OTPChallenge.email == email,
                OTPChallenge.purpose == purpose,
                col(OTPChallenge.verified_at).is_(None),
            )
            .order_by(col(OTPChallenge.created_at).desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def close_pending(self, email: str, purpose: OTPPurpose, now: datetime) -> int:
        stmt = (
            update(OTPChallenge)
            .where(
                OTPChallenge.email == email,
                OTPChallenge.purpose == purpose,
                col(OTPChallenge.verified_at).is_(None),
            )
            .values(verified_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def consume_attempt(self, otp_id: UUID) -> Optional[int]:
        """Increment attempts in one conditional UPDATE, then read the new count."""
        stmt = (
            update(OTPChallenge)
            .where(
                OTPChallenge.id == otp_id,
                OTPChallenge.attempts < OTPChallenge.max_attempts,
            )
            .values(attempts=OTPChallenge.attempts + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None

        await self.session.flush()
        count = await self.session.exec(
            select(OTPChallenge.attempts).where(OTPChallenge.id == otp_id)
        )
        return count.one()

    async def mark_verified(self, otp_id: UUID, now: datetime) -> bool:
        stmt = (
            update(OTPChallenge)
            .where(
                OTPChallenge.id == otp_id,
                col(OTPChallenge.verified_at).is_(None),
            )
            .values(verified_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(OTPChallenge).where(OTPChallenge.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
