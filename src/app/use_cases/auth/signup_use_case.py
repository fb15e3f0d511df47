"""
Signup Use Case

Stages a signup draft and sends the email verification code. No company,
user or token exists until the code is verified.
"""

import logging

from src.app.services.otp_service import OTPService
from src.app.services.pending_registration_service import (
    PendingRegistrationService,
    SignupDraft,
)
from src.app.services.unit_of_work import UnitOfWork
from src.app.utils.credentials import (
    hash_password,
    normalize_email,
    validate_email_format,
    validate_password_strength,
)
from src.domain.entities import OTPPurpose
from src.domain.errors import DuplicateRecordError
from src.libs.result import Error, Result, Return
from .dtos import SignupCommand, SignupResponse

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand
    - Output: Result[SignupResponse]

    Business Logic:
    1. Validate both email formats and the password (all password errors reported)
    2. Hash the password
    3. Stage the draft (rejects existing user/company emails, replaces older drafts)
    4. Issue an email_verification OTP
    5. Commit; a unique violation on write is reported as EMAIL_ALREADY_EXISTS
    6. Email the code once the draft is committed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        pending_registrations: PendingRegistrationService,
        otp_service: OTPService,
    ):
        self.uow = uow
        self.pending_registrations = pending_registrations
        self.otp_service = otp_service

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        email = normalize_email(command.email)
        company_email = normalize_email(command.company_email)

        if not validate_email_format(email):
            return Return.err(Error("INVALID_EMAIL", "Invalid email format"))
        if not validate_email_format(company_email):
            return Return.err(Error("INVALID_EMAIL", "Invalid company email format"))

        strength = validate_password_strength(command.password)
        if not strength.is_valid:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Password validation failed: {', '.join(strength.errors)}",
                    details=[
                        {"field": "password", "message": message}
                        for message in strength.errors
                    ],
                )
            )

        draft = SignupDraft(
            email=email,
            password_hash=hash_password(command.password),
            first_name=command.first_name.strip(),
            last_name=command.last_name.strip(),
            phone=command.phone,
            company_name=command.company_name.strip(),
            company_email=company_email,
            company_phone=command.company_phone,
            company_abn=command.company_abn,
        )

        async with self.uow:
            try:
                staged = await self.pending_registrations.stage(draft)
                if staged.is_err():
                    return Return.err(staged.error)

                otp = await self.otp_service.create_otp(email, OTPPurpose.email_verification)
                await self.uow.commit()
            except DuplicateRecordError:
                logger.warning("Concurrent signup lost the race on a unique email")
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "User already exists with this email")
                )

        await self.otp_service.send_otp(otp)
        logger.info("Signup staged, verification code issued")
        return Return.ok(
            SignupResponse(
                email=email,
                requires_otp=True,
                message="Registration initiated. Please check your email for the verification code.",
            )
        )
