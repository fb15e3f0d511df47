"""
Refresh Token Use Case

Exchanges a live refresh token for a new access token. The refresh token
itself is not rotated and stays valid until it expires or is revoked.
"""

from uuid import UUID

from src.api.utils.jwt import sign_access_token
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import RefreshTokenResponse
from .tokens import token_payload_for


class RefreshTokenUseCase:
    """
    Business Rules:
    - Token signature, expiry and a live (unrevoked, unexpired) session row
      are all required
    - The user must still exist and be active
    - The access token is minted from the current user row, so role
      changes take effect on the next refresh
    """

    def __init__(self, uow: UnitOfWork, session_service: SessionService):
        self.uow = uow
        self.session_service = session_service

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        async with self.uow:
            payload = await self.session_service.validate(refresh_token)
            if payload is None:
                return Return.err(
                    Error("INVALID_REFRESH_TOKEN", "Invalid or expired refresh token")
                )

            user = await self.uow.users.get_by_id(UUID(payload.user_id))
            if user is None or not user.is_active:
                return Return.err(Error("USER_INACTIVE", "User account is inactive"))

            access_token = sign_access_token(token_payload_for(user))

            # Persists last_used_at
            await self.uow.commit()

            return Return.ok(RefreshTokenResponse(access_token=access_token))
