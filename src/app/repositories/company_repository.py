from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Company


class ICompanyRepository(ABC):
    """Company repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, company_id: UUID) -> Optional[Company]:
        """Get company by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Company]:
        """Get company by its contact email"""
        pass

    @abstractmethod
    async def create(self, company: Company) -> Company:
        """Create a new company"""
        pass
