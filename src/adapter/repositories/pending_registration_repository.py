from typing import Optional

from sqlalchemy import delete
from sqlmodel import select

from src.adapter.repositories.base import SqlModelRepository
from src.app.repositories.pending_registration_repository import (
    IPendingRegistrationRepository,
)
from src.domain.entities import PendingRegistration


class PendingRegistrationRepository(
    SqlModelRepository[PendingRegistration], IPendingRegistrationRepository
):
    """PendingRegistration repository implementation using SQLModel"""

    async def get_by_email(self, email: str) -> Optional[PendingRegistration]:
        stmt = select(PendingRegistration).where(PendingRegistration.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, registration: PendingRegistration) -> PendingRegistration:
        return await self._save(registration)

    async def delete_by_email(self, email: str) -> int:
        stmt = delete(PendingRegistration).where(PendingRegistration.email == email)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
