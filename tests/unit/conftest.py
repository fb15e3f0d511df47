import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fakes import FakeClock, RecordingEmailService


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.list_by_company = AsyncMock(return_value=[])
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.companies = MagicMock()
    uow.companies.get_by_id = AsyncMock(return_value=None)
    uow.companies.get_by_email = AsyncMock(return_value=None)
    uow.companies.create = AsyncMock(side_effect=lambda company: company)

    uow.pending_registrations = MagicMock()
    uow.pending_registrations.get_by_email = AsyncMock(return_value=None)
    uow.pending_registrations.create = AsyncMock(side_effect=lambda reg: reg)
    uow.pending_registrations.delete_by_email = AsyncMock(return_value=0)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.update = AsyncMock(side_effect=lambda session: session)
    uow.sessions.get_by_token_hash = AsyncMock(return_value=None)
    uow.sessions.revoke_by_token_hash = AsyncMock(return_value=True)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    uow.sessions.delete_expired_for_user = AsyncMock(return_value=0)
    uow.sessions.delete_expired = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def email_service():
    return RecordingEmailService()
