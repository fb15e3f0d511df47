from typing import Optional
from uuid import UUID

from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import MessageResponse


class SignOutUseCase:
    """Revoke one refresh session. Unknown or already revoked tokens are a no-op."""

    def __init__(self, uow: UnitOfWork, session_service: SessionService):
        self.uow = uow
        self.session_service = session_service

    async def execute(
        self, refresh_token: Optional[str], user_id: Optional[UUID] = None
    ) -> Result[MessageResponse]:
        if refresh_token:
            async with self.uow:
                await self.session_service.revoke(refresh_token, user_id=user_id)
                await self.uow.commit()

        return Return.ok(MessageResponse(message="Sign out successful"))
