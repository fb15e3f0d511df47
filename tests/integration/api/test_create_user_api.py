import pytest
import pytest_asyncio

from tests.integration.api.flows import (
    API,
    PASSWORD,
    auth_header,
    create_member,
    register_company,
    sign_in,
)


@pytest_asyncio.fixture
async def admin(client, mailbox):
    return await register_company(client, mailbox, "owner@acme.com", "office@acme.com")


def new_user(**overrides) -> dict:
    body = {
        "email": "worker@acme.com",
        "password": PASSWORD,
        "firstName": "Wendy",
        "lastName": "Worker",
        "role": "worker",
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_admin_creates_worker_who_can_sign_in(client, admin):
    user = await create_member(client, admin["accessToken"], "worker@acme.com", "worker")

    assert user["role"] == "worker"
    assert user["companyId"] == admin["user"]["companyId"]

    session = await sign_in(client, "worker@acme.com")
    assert session["user"]["companyId"] == admin["user"]["companyId"]


@pytest.mark.asyncio
async def test_worker_cannot_create_users(client, admin):
    await create_member(client, admin["accessToken"], "worker@acme.com", "worker")
    worker = await sign_in(client, "worker@acme.com")

    response = await client.post(
        f"{API}/auth/create-user",
        json=new_user(email="another@acme.com"),
        headers=auth_header(worker["accessToken"]),
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Insufficient permissions"


@pytest.mark.asyncio
async def test_create_user_requires_authentication(client):
    response = await client.post(f"{API}/auth/create-user", json=new_user())

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_admin_role_is_refused(client, admin):
    response = await client.post(
        f"{API}/auth/create-user",
        json=new_user(role="admin"),
        headers=auth_header(admin["accessToken"]),
    )

    assert response.status_code == 400
    assert response.json()["code"] == "CANNOT_CREATE_ADMIN"


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(client, admin):
    await create_member(client, admin["accessToken"], "worker@acme.com", "worker")

    response = await client.post(
        f"{API}/auth/create-user",
        json=new_user(email="Worker@Acme.com", role="client"),
        headers=auth_header(admin["accessToken"]),
    )

    assert response.status_code == 409
    assert response.json()["code"] == "USER_ALREADY_EXISTS"
