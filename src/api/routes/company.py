from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import raise_for_error
from src.api.utils.auth import require_same_company, require_site_manager_or_admin
from src.api.utils.envelope import success
from src.api.utils.jwt import TokenPayload
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.companies import GetCompanyUseCase, ListCompanyUsersUseCase
from src.depends import get_unit_of_work

router = APIRouter(prefix="/companies", tags=["Companies"])

NOT_FOUND = {"COMPANY_NOT_FOUND": status.HTTP_404_NOT_FOUND}


@router.get("/{company_id}", status_code=status.HTTP_200_OK)
async def get_company(
    company_id: UUID,
    user: TokenPayload = Depends(require_same_company("company_id")),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Company details for any member of the company.

    Raises:
        - 401 Unauthorized: no valid access token
        - 403 Forbidden: company_id is not the caller's company
        - 404 Not Found: company does not exist
    """
    use_case = GetCompanyUseCase(uow)
    result = await use_case.execute(company_id)

    if result.is_err():
        raise_for_error(result.error, NOT_FOUND)

    return success(
        "Company retrieved",
        {"company": result.value.model_dump(mode="json", by_alias=True)},
    )


@router.get("/{company_id}/users", status_code=status.HTTP_200_OK)
async def list_company_users(
    company_id: UUID,
    manager: TokenPayload = Depends(require_site_manager_or_admin),
    user: TokenPayload = Depends(require_same_company("company_id")),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Users of the company; admins and site managers only."""
    use_case = ListCompanyUsersUseCase(uow)
    result = await use_case.execute(company_id)

    if result.is_err():
        raise_for_error(result.error, NOT_FOUND)

    return success("Company users retrieved", result.value)
