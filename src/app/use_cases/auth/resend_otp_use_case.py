from src.app.services.otp_service import OTPService
from src.app.services.pending_registration_service import PendingRegistrationService
from src.app.services.unit_of_work import UnitOfWork
from src.app.utils.credentials import normalize_email
from src.domain.entities import OTPPurpose
from src.libs.result import Error, Result, Return
from .dtos import MessageResponse


class ResendOTPUseCase:
    """
    Re-issue the email_verification code for a live signup draft.

    The new code supersedes the old one; attempts start again from zero.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        otp_service: OTPService,
        pending_registrations: PendingRegistrationService,
    ):
        self.uow = uow
        self.otp_service = otp_service
        self.pending_registrations = pending_registrations

    async def execute(self, email: str) -> Result[MessageResponse]:
        email = normalize_email(email)

        async with self.uow:
            registration = await self.pending_registrations.get_active(email)
            if registration is None:
                # Persist the lazy delete of an expired draft
                await self.uow.commit()
                return Return.err(
                    Error(
                        "REGISTRATION_EXPIRED",
                        "Registration not found or expired. Please sign up again.",
                    )
                )

            otp = await self.otp_service.resend_otp(email, OTPPurpose.email_verification)
            await self.uow.commit()

        await self.otp_service.send_otp(otp)

        return Return.ok(
            MessageResponse(message="A new verification code has been sent to your email.")
        )
