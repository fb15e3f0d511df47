"""
Request Password Reset Use Case

Sends a password_reset code when the email belongs to an account, and
answers identically either way.
"""

from src.app.services.otp_service import OTPService
from src.app.services.unit_of_work import UnitOfWork
from src.app.utils.credentials import normalize_email
from src.domain.entities import OTPPurpose
from src.libs.result import Result, Return
from .dtos import MessageResponse

NEUTRAL_MESSAGE = (
    "If an account with that email exists, a password reset code has been sent."
)


class RequestPasswordResetUseCase:
    """
    Business Rules:
    - The response never reveals whether the email is registered
    - Only active users get a code
    """

    def __init__(self, uow: UnitOfWork, otp_service: OTPService):
        self.uow = uow
        self.otp_service = otp_service

    async def execute(self, email: str) -> Result[MessageResponse]:
        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None or not user.is_active:
                return Return.ok(MessageResponse(message=NEUTRAL_MESSAGE))

            otp = await self.otp_service.create_otp(email, OTPPurpose.password_reset)
            await self.uow.commit()

        await self.otp_service.send_otp(otp)

        return Return.ok(MessageResponse(message=NEUTRAL_MESSAGE))
