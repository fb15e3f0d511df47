from uuid import uuid4

from src.app.utils.credentials import hash_password
from src.domain.entities import Company, User, UserRole

PASSWORD = "Passw0rd!"


def make_company(**overrides) -> Company:
    data = dict(id=uuid4(), name="Acme Builders", email="office@acme.com", is_active=True)
    data.update(overrides)
    return Company(**data)


def make_user(company: Company, **overrides) -> User:
    data = dict(
        id=uuid4(),
        company_id=company.id,
        email="admin@acme.com",
        password_hash=hash_password(PASSWORD),
        first_name="Ada",
        last_name="Admin",
        role=UserRole.admin,
        is_active=True,
    )
    data.update(overrides)
    return User(**data)
