import pytest
import pytest_asyncio
from sqlmodel import select

from src.domain.entities import Company
from tests.integration.api.flows import API, PASSWORD, refresh_cookie, register_company


@pytest_asyncio.fixture
async def admin(client, mailbox):
    return await register_company(client, mailbox, "owner@acme.com", "office@acme.com")


@pytest.mark.asyncio
async def test_signin_sets_refresh_cookie(client, admin):
    response = await client.post(
        f"{API}/auth/signin", json={"email": "Owner@Acme.com", "password": PASSWORD}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["data"]["accessToken"]
    assert "refreshToken" not in body["data"]

    cookie = refresh_cookie(response)
    assert cookie.value
    assert cookie["httponly"] is True
    assert cookie["samesite"].lower() == "strict"
    assert int(cookie["max-age"]) == 7 * 24 * 60 * 60


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_the_same(client, admin):
    wrong_password = await client.post(
        f"{API}/auth/signin", json={"email": "owner@acme.com", "password": "Nope-1234"}
    )
    unknown_email = await client.post(
        f"{API}/auth/signin", json={"email": "ghost@acme.com", "password": PASSWORD}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_inactive_company_is_forbidden(client, db_session, admin):
    company = (await db_session.exec(select(Company))).one()
    company.is_active = False
    db_session.add(company)
    await db_session.commit()

    response = await client.post(
        f"{API}/auth/signin", json={"email": "owner@acme.com", "password": PASSWORD}
    )

    assert response.status_code == 403
    assert response.json()["code"] == "COMPANY_INACTIVE"


@pytest.mark.asyncio
async def test_me_requires_a_token(client):
    response = await client.get(f"{API}/auth/me")

    assert response.status_code == 401
    assert response.json()["message"] == "Access token required"


@pytest.mark.asyncio
async def test_me_rejects_a_garbage_token(client):
    response = await client.get(
        f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_me_returns_profile(client, admin):
    response = await client.get(
        f"{API}/auth/me", headers={"Authorization": f"Bearer {admin['accessToken']}"}
    )

    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["email"] == "owner@acme.com"
    assert user["companyId"] == admin["user"]["companyId"]
