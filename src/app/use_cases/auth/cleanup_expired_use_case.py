import logging

from src.app.services.otp_service import OTPService
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import CleanupResponse

logger = logging.getLogger(__name__)


class CleanupExpiredUseCase:
    """
    Delete expired OTP challenges and refresh sessions.

    Safe to run at any time alongside live traffic: both deletes are
    conditional on expiry and idempotent.
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

    async def execute(self) -> Result[CleanupResponse]:
        async with self.uow:
            otps = await self.otp_service.cleanup_expired()
            sessions = await self.session_service.purge_expired()
            await self.uow.commit()

        logger.info(f"Cleanup removed {otps} OTP(s) and {sessions} session(s)")
        return Return.ok(CleanupResponse(otps_deleted=otps, sessions_deleted=sessions))
