from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import CompanyResponse


class GetCompanyUseCase:
    """Read a company. Callers reach this only through the same-company gate."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, company_id: UUID) -> Result[CompanyResponse]:
        async with self.uow:
            company = await self.uow.companies.get_by_id(company_id)
            if company is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company not found"))

            return Return.ok(
                CompanyResponse(
                    company_id=str(company.id),
                    name=company.name,
                    email=company.email,
                    phone=company.phone,
                    abn=company.abn,
                    subscription_tier=company.subscription_tier.value,
                    is_active=company.is_active,
                    trial_ends_at=company.trial_ends_at,
                )
            )
