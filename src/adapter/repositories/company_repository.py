from typing import Optional
from uuid import UUID

from sqlmodel import select

from src.adapter.repositories.base import SqlModelRepository
from src.app.repositories.company_repository import ICompanyRepository
from src.domain.entities import Company


class CompanyRepository(SqlModelRepository[Company], ICompanyRepository):
    """Company repository implementation using SQLModel"""

    async def get_by_id(self, company_id: UUID) -> Optional[Company]:
        """Get company by ID"""
        stmt = select(Company).where(Company.id == company_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[Company]:
        stmt = select(Company).where(Company.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, company: Company) -> Company:
        """Create a new company"""
        return await self._save(company)
