from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import UserProfile


class GetCurrentUserUseCase:
    """Profile of the authenticated user, read fresh from the database."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserProfile]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            company = await self.uow.companies.get_by_id(user.company_id)
            return Return.ok(UserProfile.from_entities(user, company))
