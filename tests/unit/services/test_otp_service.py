import pytest

from src.app.services.otp_service import OTPService
from src.domain.entities import OTPPurpose
from tests.fakes import InMemoryOTPRepository, RecordingEmailService

EMAIL = "a@x.com"
PURPOSE = OTPPurpose.email_verification


@pytest.fixture
def otp_repo(mock_uow):
    mock_uow.otps = InMemoryOTPRepository()
    return mock_uow.otps


@pytest.fixture
def service(mock_uow, otp_repo, email_service, clock):
    return OTPService(mock_uow, email_service, clock)


@pytest.mark.asyncio
async def test_create_otp_persists_six_digit_code(service, email_service, clock):
    otp = await service.create_otp(EMAIL, PURPOSE)

    assert len(otp.code) == 6 and otp.code.isdigit()
    assert otp.attempts == 0
    assert otp.max_attempts == 5
    assert otp.created_at == clock.now()
    assert (otp.expires_at - otp.created_at).total_seconds() == 600
    assert email_service.otp_emails == []

    await service.send_otp(otp)
    assert email_service.otp_emails == [(EMAIL, otp.code, PURPOSE)]


@pytest.mark.asyncio
async def test_static_code_override(mock_uow, otp_repo, email_service, clock):
    service = OTPService(mock_uow, email_service, clock, static_code="123456")

    otp = await service.create_otp(EMAIL, PURPOSE)

    assert otp.code == "123456"


@pytest.mark.asyncio
async def test_correct_code_verifies_once(service):
    otp = await service.create_otp(EMAIL, PURPOSE)

    first = await service.verify_otp(EMAIL, otp.code, PURPOSE)
    second = await service.verify_otp(EMAIL, otp.code, PURPOSE)

    assert first.success is True
    assert first.message == "OTP verified successfully."
    assert second.success is False
    assert second.message == "No valid OTP found. Please request a new one."


@pytest.mark.asyncio
async def test_new_code_supersedes_pending_code(service):
    """Issuing a second code invalidates the first even before it expires"""
    first = await service.create_otp(EMAIL, PURPOSE)
    second = await service.create_otp(EMAIL, PURPOSE)

    if first.code == second.code:
        pytest.skip("random codes collided")

    stale = await service.verify_otp(EMAIL, first.code, PURPOSE)
    fresh = await service.verify_otp(EMAIL, second.code, PURPOSE)

    assert stale.success is False
    assert fresh.success is True


@pytest.mark.asyncio
async def test_superseding_only_touches_same_purpose(service, otp_repo):
    signup = await service.create_otp(EMAIL, OTPPurpose.email_verification)
    await service.create_otp(EMAIL, OTPPurpose.password_reset)

    assert otp_repo.rows[signup.id].verified_at is None


@pytest.mark.asyncio
async def test_wrong_code_reports_remaining_attempts(service, otp_repo):
    otp = await service.create_otp(EMAIL, PURPOSE)
    wrong = "000000" if otp.code != "000000" else "111111"

    result = await service.verify_otp(EMAIL, wrong, PURPOSE)

    assert result.success is False
    assert result.message == "Invalid OTP code. 4 attempts remaining."
    assert otp_repo.rows[otp.id].attempts == 1


@pytest.mark.asyncio
async def test_attempts_exhaust_after_max_wrong_codes(service, otp_repo):
    """After five wrong codes even the right code is refused"""
    otp = await service.create_otp(EMAIL, PURPOSE)
    wrong = "000000" if otp.code != "000000" else "111111"

    for _ in range(5):
        result = await service.verify_otp(EMAIL, wrong, PURPOSE)
        assert result.success is False

    final = await service.verify_otp(EMAIL, otp.code, PURPOSE)

    assert final.success is False
    assert final.message == "Maximum verification attempts reached. Please request a new OTP."
    assert otp_repo.rows[otp.id].attempts == 5


@pytest.mark.asyncio
async def test_expired_code_is_rejected_without_consuming_attempt(service, otp_repo, clock):
    otp = await service.create_otp(EMAIL, PURPOSE)
    clock.advance(minutes=11)

    result = await service.verify_otp(EMAIL, otp.code, PURPOSE)

    assert result.success is False
    assert result.message == "OTP has expired. Please request a new one."
    assert otp_repo.rows[otp.id].attempts == 0


@pytest.mark.asyncio
async def test_no_code_issued(service):
    result = await service.verify_otp(EMAIL, "123456", PURPOSE)

    assert result.success is False
    assert result.message == "No valid OTP found. Please request a new one."


@pytest.mark.asyncio
async def test_resend_resets_attempts(service, otp_repo):
    otp = await service.create_otp(EMAIL, PURPOSE)
    wrong = "000000" if otp.code != "000000" else "111111"
    for _ in range(5):
        await service.verify_otp(EMAIL, wrong, PURPOSE)

    fresh = await service.resend_otp(EMAIL, PURPOSE)
    result = await service.verify_otp(EMAIL, fresh.code, PURPOSE)

    assert fresh.id != otp.id
    assert result.success is True


@pytest.mark.asyncio
async def test_cleanup_deletes_only_expired(service, otp_repo, clock):
    old = await service.create_otp("old@x.com", PURPOSE)
    clock.advance(minutes=11)
    new = await service.create_otp("new@x.com", PURPOSE)

    deleted = await service.cleanup_expired()

    assert deleted == 1
    assert old.id not in otp_repo.rows
    assert new.id in otp_repo.rows
    assert await service.cleanup_expired() == 0


@pytest.mark.asyncio
async def test_otp_service_never_commits(service, mock_uow):
    otp = await service.create_otp(EMAIL, PURPOSE)
    await service.verify_otp(EMAIL, otp.code, PURPOSE)

    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_send_failure_is_logged_not_raised(mock_uow, otp_repo, clock):
    service = OTPService(mock_uow, RecordingEmailService(fail=True), clock)
    otp = await service.create_otp(EMAIL, PURPOSE)

    await service.send_otp(otp)

    assert otp.id in otp_repo.rows


@pytest.mark.asyncio
async def test_non_ascii_code_is_an_ordinary_mismatch(service, otp_repo):
    otp = await service.create_otp(EMAIL, PURPOSE)

    result = await service.verify_otp(EMAIL, "١٢٣٤٥٦", PURPOSE)

    assert result.success is False
    assert result.message == "Invalid OTP code. 4 attempts remaining."
    assert otp_repo.rows[otp.id].attempts == 1


@pytest.mark.asyncio
async def test_invalidate_closes_pending_code(service):
    otp = await service.create_otp(EMAIL, PURPOSE)

    assert await service.invalidate(EMAIL, PURPOSE) == 1

    result = await service.verify_otp(EMAIL, otp.code, PURPOSE)
    assert result.message == "No valid OTP found. Please request a new one."
