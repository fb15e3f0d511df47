"""
Email sinks

LoggingEmailService records what would be sent; ResendEmailService delivers
through the Resend API. Both raise on failure and leave swallowing to the
caller.
"""

import asyncio
import html
import logging
from typing import Optional

import resend

from src.app.services.email_service import IEmailService
from src.domain.entities import OTPPurpose

logger = logging.getLogger(__name__)

OTP_SUBJECTS = {
    OTPPurpose.email_verification: "Verify Your Email - {app}",
    OTPPurpose.password_reset: "Reset Your Password - {app}",
    OTPPurpose.two_factor: "Two-Factor Authentication - {app}",
}

OTP_MESSAGES = {
    OTPPurpose.email_verification: (
        "Please use the verification code below to complete your {app} account "
        "setup. This code will expire in {minutes} minutes for your security."
    ),
    OTPPurpose.password_reset: (
        "You requested to reset your password. Please use the verification code "
        "below to continue with the password reset process."
    ),
    OTPPurpose.two_factor: (
        "Please use the verification code below to complete your two-factor "
        "authentication and secure access to your account."
    ),
}

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_CODE_STYLE = (
    "font-size: 32px; font-weight: 700; letter-spacing: 8px; color: #2563eb; "
    "text-align: center; margin: 24px 0;"
)
_MUTED_STYLE = "color: #666; font-size: 14px;"


def otp_subject(purpose: OTPPurpose, app_name: str) -> str:
    template = OTP_SUBJECTS.get(purpose, "Verification Code - {app}")
    return template.format(app=app_name)


def _otp_html(code: str, purpose: OTPPurpose, app_name: str, expiry_minutes: int) -> str:
    message = OTP_MESSAGES.get(
        purpose, "Please use the verification code below to complete your request."
    ).format(app=app_name, minutes=expiry_minutes)
    return f"""
    <html>
    <body style="{_BODY_STYLE}">
        <p>{html.escape(message)}</p>
        <div style="{_CODE_STYLE}">{html.escape(code)}</div>
        <p style="{_MUTED_STYLE}">This code expires in {expiry_minutes} minutes.</p>
        <p style="{_MUTED_STYLE}">If you didn't request this code, you can safely ignore this email.</p>
    </body>
    </html>
    """


def _welcome_html(first_name: str, company_name: str, app_name: str) -> str:
    return f"""
    <html>
    <body style="{_BODY_STYLE}">
        <h2>Welcome to {html.escape(app_name)}!</h2>
        <p>Hi {html.escape(first_name)},</p>
        <p>Your account for <strong>{html.escape(company_name)}</strong> is ready.
        Your free trial has started and you can sign in right away.</p>
    </body>
    </html>
    """


class LoggingEmailService(IEmailService):
    """Development sink: nothing leaves the process."""

    def __init__(self, app_name: str = "Site Tasker", reveal_codes: bool = False):
        self.app_name = app_name
        self.reveal_codes = reveal_codes

    async def send_otp_email(self, email: str, code: str, purpose: OTPPurpose) -> None:
        subject = otp_subject(purpose, self.app_name)
        if self.reveal_codes:
            logger.info(f"[EMAIL] would send '{subject}' to {email} with code {code}")
        else:
            logger.info(f"[EMAIL] would send '{subject}' to {email}")

    async def send_welcome_email(self, email: str, first_name: str, company_name: str) -> None:
        logger.info(f"[EMAIL] would send 'Welcome to {self.app_name}!' to {email}")


class ResendEmailService(IEmailService):
    """Delivers through Resend; the blocking client runs in a worker thread."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        app_name: str = "Site Tasker",
        otp_expiry_minutes: int = 10,
        timeout_seconds: Optional[float] = 10,
    ):
        self.api_key = api_key
        self.sender = sender
        self.app_name = app_name
        self.otp_expiry_minutes = otp_expiry_minutes
        self.timeout_seconds = timeout_seconds

    async def _send(self, to: str, subject: str, body: str) -> None:
        resend.api_key = self.api_key
        params = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": body,
        }
        await asyncio.wait_for(
            asyncio.to_thread(resend.Emails.send, params),
            timeout=self.timeout_seconds,
        )
        logger.info(f"Email '{subject}' sent to {to}")

    async def send_otp_email(self, email: str, code: str, purpose: OTPPurpose) -> None:
        await self._send(
            email,
            otp_subject(purpose, self.app_name),
            _otp_html(code, purpose, self.app_name, self.otp_expiry_minutes),
        )

    async def send_welcome_email(self, email: str, first_name: str, company_name: str) -> None:
        await self._send(
            email,
            f"Welcome to {self.app_name}!",
            _welcome_html(first_name, company_name, self.app_name),
        )
