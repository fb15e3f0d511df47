from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import PendingRegistration


class IPendingRegistrationRepository(ABC):
    """PendingRegistration repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[PendingRegistration]:
        """Get the staged registration for an email (expired or not)"""
        pass

    @abstractmethod
    async def create(self, registration: PendingRegistration) -> PendingRegistration:
        """Stage a new registration"""
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete any staged registration for an email. Returns count deleted."""
        pass
