"""
Sign In Use Case

Handles credential authentication and opens a refresh session.
"""

from typing import Optional

from src.api.utils.jwt import sign_token_pair
from src.app.services.clock import IClock
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.app.utils.credentials import (
    burn_password_check,
    normalize_email,
    verify_password,
)
from src.libs.result import Error, Result, Return
from .dtos import AuthResponse, ClientInfo, UserProfile
from .tokens import token_payload_for

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid email or password")


class SignInUseCase:
    """
    Use case for sign-in and token issuance.

    Business Rules:
    - Unknown email, wrong password and deactivated user all fail with the
      same INVALID_CREDENTIALS error
    - A bcrypt comparison runs even when the email is unknown
    - An inactive company fails with COMPANY_INACTIVE, checked only after
      the password matched
    - Creates a new refresh session and updates last_login_at
    """

    def __init__(self, uow: UnitOfWork, session_service: SessionService, clock: IClock):
        self.uow = uow
        self.session_service = session_service
        self.clock = clock

    async def execute(
        self, email: str, password: str, client: Optional[ClientInfo] = None
    ) -> Result[AuthResponse]:
        """
        Execute sign-in use case.

        Args:
            email: User email
            password: Plain text password
            client: IP address and User-Agent recorded on the session

        Returns:
            Result with AuthResponse, or Error
        """
        client = client or ClientInfo()
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None:
                burn_password_check(password)
                return Return.err(INVALID_CREDENTIALS)

            if not verify_password(password, user.password_hash):
                return Return.err(INVALID_CREDENTIALS)

            if not user.is_active:
                return Return.err(INVALID_CREDENTIALS)

            company = await self.uow.companies.get_by_id(user.company_id)
            if company is None or not company.is_active:
                return Return.err(
                    Error("COMPANY_INACTIVE", "Company account is inactive")
                )

            tokens = sign_token_pair(token_payload_for(user))
            await self.session_service.store(
                user.id, tokens.refresh_token, client.ip_address, client.user_agent
            )

            user.last_login_at = self.clock.now()
            user = await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(
                AuthResponse(
                    user=UserProfile.from_entities(user, company),
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )
