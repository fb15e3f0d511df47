import pytest

from tests.integration.api.flows import (
    API,
    auth_header,
    create_member,
    register_company,
    sign_in,
)


@pytest.mark.asyncio
async def test_members_cannot_read_another_company(client, mailbox):
    acme = await register_company(client, mailbox, "owner@acme.com", "office@acme.com")
    rival = await register_company(client, mailbox, "owner@rival.com", "office@rival.com")
    await create_member(client, acme["accessToken"], "lead@acme.com", "site_manager")
    manager = await sign_in(client, "lead@acme.com")
    headers = auth_header(manager["accessToken"])

    response = await client.get(
        f"{API}/companies/{rival['user']['companyId']}", headers=headers
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Access denied to other company data"

    response = await client.get(
        f"{API}/companies/{rival['user']['companyId']}/users", headers=headers
    )
    assert response.status_code == 403

    response = await client.get(
        f"{API}/companies/{acme['user']['companyId']}", headers=headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["company"]["name"] == "Co"


@pytest.mark.asyncio
async def test_company_users_listing(client, mailbox):
    acme = await register_company(client, mailbox, "owner@acme.com", "office@acme.com")
    await create_member(client, acme["accessToken"], "crew@acme.com", "worker")
    company_id = acme["user"]["companyId"]

    response = await client.get(
        f"{API}/companies/{company_id}/users", headers=auth_header(acme["accessToken"])
    )

    assert response.status_code == 200
    emails = {user["email"] for user in response.json()["data"]["users"]}
    assert emails == {"owner@acme.com", "crew@acme.com"}

    worker = await sign_in(client, "crew@acme.com")
    response = await client.get(
        f"{API}/companies/{company_id}/users", headers=auth_header(worker["accessToken"])
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_company_requires_authentication(client, mailbox):
    acme = await register_company(client, mailbox, "owner@acme.com", "office@acme.com")

    response = await client.get(f"{API}/companies/{acme['user']['companyId']}")

    assert response.status_code == 401
