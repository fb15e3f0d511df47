import logging
from unittest.mock import patch

import pytest

from src.adapter.services.email_service import (
    LoggingEmailService,
    ResendEmailService,
    otp_subject,
)
from src.domain.entities import OTPPurpose


def test_subject_depends_on_purpose():
    assert otp_subject(OTPPurpose.email_verification, "Site Tasker") == (
        "Verify Your Email - Site Tasker"
    )
    assert otp_subject(OTPPurpose.password_reset, "Site Tasker") == (
        "Reset Your Password - Site Tasker"
    )


@pytest.mark.asyncio
async def test_logging_sink_hides_codes_unless_asked(caplog):
    caplog.set_level(logging.INFO, logger="src.adapter.services.email_service")

    await LoggingEmailService(reveal_codes=False).send_otp_email(
        "a@x.com", "482913", OTPPurpose.email_verification
    )
    assert "482913" not in caplog.text

    await LoggingEmailService(reveal_codes=True).send_otp_email(
        "a@x.com", "482913", OTPPurpose.email_verification
    )
    assert "482913" in caplog.text


@pytest.mark.asyncio
async def test_resend_sink_sends_subject_and_code():
    service = ResendEmailService(api_key="re_test", sender="Site Tasker <noreply@x.com>")

    with patch("src.adapter.services.email_service.resend.Emails.send") as send:
        await service.send_otp_email("a@x.com", "482913", OTPPurpose.password_reset)

    params = send.call_args[0][0]
    assert params["to"] == ["a@x.com"]
    assert params["subject"] == "Reset Your Password - Site Tasker"
    assert "482913" in params["html"]


@pytest.mark.asyncio
async def test_resend_failures_propagate():
    service = ResendEmailService(api_key="re_test", sender="noreply@x.com")

    with patch(
        "src.adapter.services.email_service.resend.Emails.send",
        side_effect=RuntimeError("boom"),
    ):
        with pytest.raises(RuntimeError):
            await service.send_welcome_email("a@x.com", "A", "Co")
