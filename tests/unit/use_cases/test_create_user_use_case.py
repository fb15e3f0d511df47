import pytest

from src.app.use_cases.auth import CreateUserCommand, CreateUserUseCase
from src.app.utils.credentials import verify_password
from src.domain.entities import UserRole
from src.domain.errors import DuplicateRecordError
from tests.unit.use_cases.helpers import make_company, make_user


@pytest.fixture
def company(mock_uow):
    company = make_company()
    mock_uow.companies.get_by_id.return_value = company
    return company


@pytest.fixture
def use_case(mock_uow, clock):
    return CreateUserUseCase(mock_uow, clock)


def command(**overrides) -> CreateUserCommand:
    data = dict(
        email="Worker@Acme.com",
        password="Passw0rd!",
        first_name="Wendy",
        last_name="Worker",
        role="worker",
        employee_id="E-17",
    )
    data.update(overrides)
    return CreateUserCommand(**data)


@pytest.mark.asyncio
async def test_creates_verified_user_in_admin_company(use_case, mock_uow, clock, company):
    result = await use_case.execute(company.id, command())

    assert result.is_ok()
    assert result.value.email == "worker@acme.com"
    assert result.value.role == "worker"
    assert result.value.company_id == str(company.id)
    assert result.value.employee_id == "E-17"

    created = mock_uow.users.create.call_args[0][0]
    assert created.role == UserRole.worker
    assert created.email_verified_at == clock.now()
    assert verify_password("Passw0rd!", created.password_hash)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_admin_role_is_refused(use_case, mock_uow, company):
    result = await use_case.execute(company.id, command(role="admin"))

    assert result.is_err()
    assert result.error.code == "CANNOT_CREATE_ADMIN"
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_role(use_case, company):
    result = await use_case.execute(company.id, command(role="owner"))

    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.details == [{"field": "role", "message": "Invalid role"}]


@pytest.mark.asyncio
async def test_existing_email(use_case, mock_uow, company):
    mock_uow.users.get_by_email.return_value = make_user(company, email="worker@acme.com")

    result = await use_case.execute(company.id, command())

    assert result.is_err()
    assert result.error.code == "USER_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_unique_violation_on_commit(use_case, mock_uow, company):
    mock_uow.commit.side_effect = DuplicateRecordError("users.email")

    result = await use_case.execute(company.id, command())

    assert result.error.code == "USER_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_weak_password(use_case, company):
    result = await use_case.execute(company.id, command(password="weakpass"))

    assert result.error.code == "VALIDATION_ERROR"
    assert all(detail["field"] == "password" for detail in result.error.details)


@pytest.mark.asyncio
async def test_missing_company(use_case, mock_uow, company):
    mock_uow.companies.get_by_id.return_value = None

    result = await use_case.execute(company.id, command())

    assert result.error.code == "COMPANY_NOT_FOUND"
