from typing import List, Optional
from uuid import UUID

from sqlmodel import select

from src.adapter.repositories.base import SqlModelRepository
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(SqlModelRepository[User], IUserRepository):
    """User repository implementation using SQLModel"""

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_company(self, company_id: UUID) -> List[User]:
        stmt = (
            select(User)
            .where(User.company_id == company_id)
            .order_by(User.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, user: User) -> User:
        """Create a new user"""
        return await self._save(user)

    async def update(self, user: User) -> User:
        """Update existing user"""
        return await self._save(user)
