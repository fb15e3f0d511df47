from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import CompanyUser, CompanyUsersResponse


class ListCompanyUsersUseCase:
    """All users of one company, oldest first."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, company_id: UUID) -> Result[CompanyUsersResponse]:
        async with self.uow:
            if await self.uow.companies.get_by_id(company_id) is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company not found"))

            users = await self.uow.users.list_by_company(company_id)
            return Return.ok(
                CompanyUsersResponse(
                    users=[
                        CompanyUser(
                            user_id=str(user.id),
                            email=user.email,
                            first_name=user.first_name,
                            last_name=user.last_name,
                            role=user.role.value,
                            employee_id=user.employee_id,
                            is_active=user.is_active,
                            last_login_at=user.last_login_at,
                        )
                        for user in users
                    ]
                )
            )
