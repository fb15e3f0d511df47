from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.company_repository import CompanyRepository
from src.adapter.repositories.otp_repository import OTPRepository
from src.adapter.repositories.pending_registration_repository import (
    PendingRegistrationRepository,
)
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import DuplicateRecordError


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.companies = CompanyRepository(self.session)
        self.pending_registrations = PendingRegistrationRepository(self.session)
        self.otps = OTPRepository(self.session)
        self.sessions = SessionRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateRecordError(str(exc.orig)) from exc

    async def rollback(self):
        await self.session.rollback()
