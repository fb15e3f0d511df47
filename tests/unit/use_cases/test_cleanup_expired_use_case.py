from datetime import timedelta

import pytest

from src.app.services.otp_service import OTPService
from src.app.services.session_service import SessionService
from src.app.use_cases.auth import CleanupExpiredUseCase
from src.domain.entities import OTPPurpose
from tests.fakes import InMemoryOTPRepository


@pytest.mark.asyncio
async def test_cleanup_removes_expired_otps_and_sessions(mock_uow, email_service, clock):
    mock_uow.otps = InMemoryOTPRepository()
    otp_service = OTPService(mock_uow, email_service, clock)
    await otp_service.create_otp("old@acme.com", OTPPurpose.password_reset)
    clock.advance(minutes=30)
    fresh = await otp_service.create_otp("new@acme.com", OTPPurpose.password_reset)
    mock_uow.sessions.delete_expired.return_value = 4

    use_case = CleanupExpiredUseCase(mock_uow, otp_service, SessionService(mock_uow, clock))
    result = await use_case.execute()

    assert result.value.otps_deleted == 1
    assert result.value.sessions_deleted == 4
    assert list(mock_uow.otps.rows) == [fresh.id]
    mock_uow.sessions.delete_expired.assert_awaited_once_with(clock.now())
    mock_uow.commit.assert_awaited_once()
