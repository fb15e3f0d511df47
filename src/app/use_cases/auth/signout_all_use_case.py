from uuid import UUID

from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import SignOutAllResponse


class SignOutAllUseCase:
    """Revoke every refresh session of a user (sign out everywhere)."""

    def __init__(self, uow: UnitOfWork, session_service: SessionService):
        self.uow = uow
        self.session_service = session_service

    async def execute(self, user_id: UUID) -> Result[SignOutAllResponse]:
        async with self.uow:
            count = await self.session_service.revoke_all(user_id)
            await self.uow.commit()

        return Return.ok(SignOutAllResponse(revoked_sessions=count))
