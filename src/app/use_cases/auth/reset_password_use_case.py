"""
Reset Password Use Case

Sets a new password after a password_reset code is verified, then
revokes every refresh session of the user.
"""

import logging

from src.app.services.otp_service import OTPService
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.app.utils.credentials import (
    hash_password,
    normalize_email,
    validate_password_strength,
)
from src.domain.entities import OTPPurpose
from src.libs.result import Error, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Business Rules:
    - Password strength is checked before the code, so a weak password
      does not burn an attempt
    - A failed code check commits the consumed attempt
    - Success revokes all of the user's sessions
    """

    def __init__(
        self,
        uow: UnitOfWork,
        otp_service: OTPService,
        session_service: SessionService,
    ):
        self.uow = uow
        self.otp_service = otp_service
        self.session_service = session_service

    async def execute(
        self, email: str, code: str, new_password: str
    ) -> Result[MessageResponse]:
        email = normalize_email(email)

        strength = validate_password_strength(new_password)
        if not strength.is_valid:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Password validation failed: {', '.join(strength.errors)}",
                    details=[
                        {"field": "newPassword", "message": message}
                        for message in strength.errors
                    ],
                )
            )

        async with self.uow:
            verification = await self.otp_service.verify_otp(
                email, code.strip(), OTPPurpose.password_reset
            )
            if not verification.success:
                await self.uow.commit()
                return Return.err(Error("OTP_INVALID", verification.message))

            user = await self.uow.users.get_by_email(email)
            if user is None:
                await self.uow.commit()
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.password_hash = hash_password(new_password)
            await self.uow.users.update(user)

            revoked = await self.session_service.revoke_all(user.id)
            await self.uow.commit()

        logger.info(f"Password reset for user {user.id}, {revoked} session(s) revoked")
        return Return.ok(
            MessageResponse(
                message="Password reset successful. Please sign in with your new password."
            )
        )
