from abc import ABC, abstractmethod

from src.app.repositories.company_repository import ICompanyRepository
from src.app.repositories.otp_repository import IOTPRepository
from src.app.repositories.pending_registration_repository import IPendingRegistrationRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    companies: ICompanyRepository
    pending_registrations: IPendingRegistrationRepository
    otps: IOTPRepository
    sessions: ISessionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        """Commit the transaction. Raises DuplicateRecordError on unique violations."""
        pass

    @abstractmethod
    async def rollback(self):
        pass
