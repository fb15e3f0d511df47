"""
Verify OTP Use Case

Completes a signup: checks the email_verification code, promotes the
pending draft into a company and its admin, and opens the first session.
"""

import logging
from typing import Optional

from src.api.utils.jwt import sign_token_pair
from src.app.services.clock import IClock
from src.app.services.email_service import IEmailService
from src.app.services.otp_service import OTPService
from src.app.services.pending_registration_service import PendingRegistrationService
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.app.utils.credentials import normalize_email
from src.domain.entities import OTPPurpose
from src.domain.errors import DuplicateRecordError
from src.libs.result import Error, Result, Return
from .dtos import AuthResponse, ClientInfo, UserProfile
from .tokens import token_payload_for

logger = logging.getLogger(__name__)


def _conflict_error(exc: DuplicateRecordError) -> Error:
    if "companies" in str(exc):
        return Error("COMPANY_ALREADY_EXISTS", "Company already exists with this email")
    return Error("EMAIL_ALREADY_EXISTS", "User already exists with this email")


class VerifyOTPUseCase:
    """
    Use case for signup completion.

    Business Rules:
    - A failed check still commits so the consumed attempt persists
    - OTP failures surface the OTP engine's message verbatim
    - Company, admin user and first session are committed together
    - A unique collision while promoting is final: the draft is deleted,
      the code stays consumed and the caller must sign up again
    - The welcome email is sent after commit and never fails the call
    """

    def __init__(
        self,
        uow: UnitOfWork,
        otp_service: OTPService,
        pending_registrations: PendingRegistrationService,
        session_service: SessionService,
        email_service: IEmailService,
        clock: IClock,
    ):
        self.uow = uow
        self.otp_service = otp_service
        self.pending_registrations = pending_registrations
        self.session_service = session_service
        self.email_service = email_service
        self.clock = clock

    async def execute(
        self, email: str, code: str, client: Optional[ClientInfo] = None
    ) -> Result[AuthResponse]:
        """
        Execute signup completion.

        Returns:
            Result[AuthResponse] with profile and token pair, or
            Error(OTP_INVALID / REGISTRATION_EXPIRED / EMAIL_ALREADY_EXISTS /
            COMPANY_ALREADY_EXISTS)
        """
        client = client or ClientInfo()
        email = normalize_email(email)

        async with self.uow:
            verification = await self.otp_service.verify_otp(
                email, code.strip(), OTPPurpose.email_verification
            )
            if not verification.success:
                await self.uow.commit()
                return Return.err(Error("OTP_INVALID", verification.message))

            try:
                promoted = await self.pending_registrations.promote(email)
                if promoted.is_err():
                    await self.uow.commit()
                    return Return.err(promoted.error)

                company = promoted.value.company
                user = promoted.value.user

                tokens = sign_token_pair(token_payload_for(user))
                await self.session_service.store(
                    user.id, tokens.refresh_token, client.ip_address, client.user_agent
                )

                user.last_login_at = self.clock.now()
                user = await self.uow.users.update(user)

                await self.uow.commit()
            except DuplicateRecordError as exc:
                logger.warning("Signup completion collided with an existing record")
                await self._discard_registration(email)
                return Return.err(_conflict_error(exc))

        logger.info(f"Company {company.id} created with admin {user.id}")

        try:
            await self.email_service.send_welcome_email(
                user.email, user.first_name, company.name
            )
        except Exception:
            logger.warning("Failed to send welcome email", exc_info=True)

        return Return.ok(
            AuthResponse(
                user=UserProfile.from_entities(user, company),
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
            )
        )

    async def _discard_registration(self, email: str) -> None:
        await self.uow.rollback()
        await self.uow.pending_registrations.delete_by_email(email)
        await self.otp_service.invalidate(email, OTPPurpose.email_verification)
        await self.uow.commit()
