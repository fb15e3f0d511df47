"""
OTP Service

Issues, verifies and expires one-time numeric codes scoped to
(email, purpose). Runs inside the caller's unit of work and never
commits; the calling use case owns the transaction.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional

from pydantic import BaseModel

from src.app.services.clock import IClock
from src.app.services.email_service import IEmailService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import OTPChallenge, OTPPurpose

logger = logging.getLogger(__name__)

OTP_LENGTH = 6


class OTPVerification(BaseModel):
    success: bool
    message: str


class OTPService:
    """
    OTP Engine.

    Business Rules:
    - Issuing a code closes every pending code for the same (email, purpose)
    - Codes are 6 digits, or STATIC_OTP outside production
    - Every check after expiry/exhaustion screening consumes one attempt
    - Attempts are consumed with a conditional UPDATE so concurrent checks
      cannot exceed max_attempts
    - Codes are persisted by create_otp and emailed by send_otp, which the
      caller runs after its commit; delivery failure is logged, never raised
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_service: IEmailService,
        clock: IClock,
        expiry_minutes: int = 10,
        max_attempts: int = 5,
        static_code: Optional[str] = None,
    ):
        self.uow = uow
        self.email_service = email_service
        self.clock = clock
        self.expiry_minutes = expiry_minutes
        self.max_attempts = max_attempts
        self.static_code = static_code

    def _generate_code(self) -> str:
        if self.static_code:
            return self.static_code
        return str(secrets.randbelow(9 * 10 ** (OTP_LENGTH - 1)) + 10 ** (OTP_LENGTH - 1))

    async def create_otp(
        self,
        email: str,
        purpose: OTPPurpose,
        expiry_minutes: Optional[int] = None,
    ) -> OTPChallenge:
        """
        Issue a new code, superseding any pending one for the pair.

        Args:
            email: Address the code is sent to
            purpose: What the code will be accepted for
            expiry_minutes: Override of the configured lifetime

        Returns:
            The persisted challenge
        """
        now = self.clock.now()
        closed = await self.uow.otps.close_pending(email, purpose, now)
        if closed:
            logger.info(f"Superseded {closed} pending {purpose.value} OTP(s)")

        minutes = expiry_minutes if expiry_minutes is not None else self.expiry_minutes
        otp = OTPChallenge(
            email=email,
            purpose=purpose,
            code=self._generate_code(),
            attempts=0,
            max_attempts=self.max_attempts,
            expires_at=now + timedelta(minutes=minutes),
            created_at=now,
        )
        return await self.uow.otps.create(otp)

    async def verify_otp(self, email: str, code: str, purpose: OTPPurpose) -> OTPVerification:
        """
        Check a submitted code against the latest pending challenge.

        Expired and exhausted challenges are rejected without consuming an
        attempt; every other check consumes one before the comparison.
        """
        otp = await self.uow.otps.get_latest_pending(email, purpose)

        if otp is None:
            return OTPVerification(
                success=False,
                message="No valid OTP found. Please request a new one.",
            )

        if otp.expires_at < self.clock.now():
            return OTPVerification(
                success=False,
                message="OTP has expired. Please request a new one.",
            )

        exhausted = OTPVerification(
            success=False,
            message="Maximum verification attempts reached. Please request a new OTP.",
        )
        if otp.attempts >= otp.max_attempts:
            return exhausted

        attempts = await self.uow.otps.consume_attempt(otp.id)
        if attempts is None:
            # Lost the race to a concurrent check
            return exhausted

        if not secrets.compare_digest(otp.code.encode("utf-8"), code.encode("utf-8")):
            remaining = max(otp.max_attempts - attempts, 0)
            return OTPVerification(
                success=False,
                message=f"Invalid OTP code. {remaining} attempts remaining.",
            )

        if not await self.uow.otps.mark_verified(otp.id, self.clock.now()):
            # Superseded or consumed by a concurrent request
            return OTPVerification(
                success=False,
                message="No valid OTP found. Please request a new one.",
            )

        return OTPVerification(success=True, message="OTP verified successfully.")

    async def resend_otp(self, email: str, purpose: OTPPurpose) -> OTPChallenge:
        """A resend is a fresh code; attempts of the old one do not carry over."""
        return await self.create_otp(email, purpose)

    async def cleanup_expired(self) -> int:
        count = await self.uow.otps.delete_expired(self.clock.now())
        if count:
            logger.info(f"Deleted {count} expired OTP(s)")
        return count

    async def invalidate(self, email: str, purpose: OTPPurpose) -> int:
        """Close every pending code for the pair without issuing a new one."""
        return await self.uow.otps.close_pending(email, purpose, self.clock.now())

    async def send_otp(self, otp: OTPChallenge) -> None:
        """Email a persisted code. Call after the issuing transaction commits."""
        try:
            await self.email_service.send_otp_email(otp.email, otp.code, otp.purpose)
        except Exception:
            logger.warning(f"Failed to send {otp.purpose.value} OTP email", exc_info=True)
