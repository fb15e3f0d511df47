from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from src.api.utils.jwt import TokenPayload, sign_access_token, sign_refresh_token
from src.app.services.session_service import SessionService
from src.app.utils.credentials import hash_refresh_token
from src.domain.entities import RefreshSession


def payload_for(user_id: UUID) -> TokenPayload:
    return TokenPayload(
        user_id=str(user_id), email="w@x.com", role="worker", company_id=str(uuid4())
    )


@pytest.fixture
def service(mock_uow, clock):
    return SessionService(mock_uow, clock)


@pytest.mark.asyncio
async def test_store_purges_expired_then_saves_digest(service, mock_uow, clock):
    user_id = uuid4()
    raw = sign_refresh_token(payload_for(user_id))

    session = await service.store(user_id, raw, "10.0.0.1", "pytest")

    mock_uow.sessions.delete_expired_for_user.assert_awaited_once_with(user_id, clock.now())
    assert session.token_hash == hash_refresh_token(raw)
    assert session.token_hash != raw
    assert session.expires_at == clock.now() + timedelta(days=7)
    assert session.ip_address == "10.0.0.1"
    assert session.revoked is False


@pytest.mark.asyncio
async def test_validate_accepts_live_session(service, mock_uow, clock):
    user_id = uuid4()
    raw = sign_refresh_token(payload_for(user_id))
    mock_uow.sessions.get_by_token_hash.return_value = RefreshSession(
        user_id=user_id,
        token_hash=hash_refresh_token(raw),
        expires_at=clock.now() + timedelta(days=1),
    )

    payload = await service.validate(raw, user_id)

    assert payload.user_id == str(user_id)
    mock_uow.sessions.get_by_token_hash.assert_awaited_once_with(
        hash_refresh_token(raw), user_id=user_id
    )
    mock_uow.sessions.update.assert_awaited_once()


@pytest.mark.asyncio
async def test_validate_rejects_revoked_session(service, mock_uow, clock):
    user_id = uuid4()
    raw = sign_refresh_token(payload_for(user_id))
    mock_uow.sessions.get_by_token_hash.return_value = RefreshSession(
        user_id=user_id,
        token_hash=hash_refresh_token(raw),
        revoked=True,
        expires_at=clock.now() + timedelta(days=1),
    )

    assert await service.validate(raw, user_id) is None


@pytest.mark.asyncio
async def test_validate_rejects_expired_session_row(service, mock_uow, clock):
    user_id = uuid4()
    raw = sign_refresh_token(payload_for(user_id))
    mock_uow.sessions.get_by_token_hash.return_value = RefreshSession(
        user_id=user_id,
        token_hash=hash_refresh_token(raw),
        expires_at=clock.now() - timedelta(seconds=1),
    )

    assert await service.validate(raw, user_id) is None


@pytest.mark.asyncio
async def test_validate_rejects_unknown_token(service, mock_uow):
    user_id = uuid4()
    raw = sign_refresh_token(payload_for(user_id))

    assert await service.validate(raw, user_id) is None


@pytest.mark.asyncio
async def test_validate_rejects_other_users_token(service, mock_uow):
    raw = sign_refresh_token(payload_for(uuid4()))

    assert await service.validate(raw, uuid4()) is None
    mock_uow.sessions.get_by_token_hash.assert_not_called()


@pytest.mark.asyncio
async def test_validate_rejects_access_token(service, mock_uow):
    user_id = uuid4()
    raw = sign_access_token(payload_for(user_id))

    assert await service.validate(raw, user_id) is None
    mock_uow.sessions.get_by_token_hash.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_is_scoped_to_user(service, mock_uow, clock):
    user_id = uuid4()

    await service.revoke("raw", user_id=user_id)

    mock_uow.sessions.revoke_by_token_hash.assert_awaited_once_with(
        hash_refresh_token("raw"), clock.now(), user_id=user_id
    )


@pytest.mark.asyncio
async def test_revoke_all(service, mock_uow, clock):
    user_id = uuid4()
    mock_uow.sessions.revoke_all_by_user_id.return_value = 3

    assert await service.revoke_all(user_id) == 3
    mock_uow.sessions.revoke_all_by_user_id.assert_awaited_once_with(user_id, clock.now())
