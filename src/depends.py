import logging
from datetime import timedelta

from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig, is_production
from src.adapter.services.clock import SystemClock
from src.adapter.services.email_service import LoggingEmailService, ResendEmailService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.clock import IClock
from src.app.services.email_service import IEmailService
from src.app.services.otp_service import OTPService
from src.app.services.pending_registration_service import PendingRegistrationService
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> IClock:
    return SystemClock()


def get_email_service() -> IEmailService:
    if ApplicationConfig.SEND_EMAILS and ApplicationConfig.RESEND_API_KEY:
        return ResendEmailService(
            api_key=ApplicationConfig.RESEND_API_KEY,
            sender=ApplicationConfig.EMAIL_FROM,
            app_name=ApplicationConfig.APP_NAME,
            otp_expiry_minutes=int(ApplicationConfig.OTP_EXPIRY_MINUTES),
            timeout_seconds=float(ApplicationConfig.EMAIL_SEND_TIMEOUT_SECONDS),
        )
    return LoggingEmailService(
        app_name=ApplicationConfig.APP_NAME,
        reveal_codes=not is_production(ApplicationConfig),
    )


def static_otp_code():
    """STATIC_OTP, unless running in production where it is ignored."""
    code = ApplicationConfig.STATIC_OTP
    if not code:
        return None
    if is_production(ApplicationConfig):
        logger.warning("STATIC_OTP is set in production and will be ignored")
        return None
    return str(code)


def get_otp_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_service: IEmailService = Depends(get_email_service),
    clock: IClock = Depends(get_clock),
) -> OTPService:
    return OTPService(
        uow,
        email_service,
        clock,
        expiry_minutes=int(ApplicationConfig.OTP_EXPIRY_MINUTES),
        max_attempts=int(ApplicationConfig.OTP_MAX_ATTEMPTS),
        static_code=static_otp_code(),
    )


def get_pending_registration_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
) -> PendingRegistrationService:
    return PendingRegistrationService(
        uow,
        clock,
        ttl=timedelta(hours=int(ApplicationConfig.PENDING_REGISTRATION_TTL_HOURS)),
        trial_period=timedelta(days=int(ApplicationConfig.TRIAL_PERIOD_DAYS)),
    )


def get_session_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
) -> SessionService:
    return SessionService(
        uow,
        clock,
        refresh_ttl=timedelta(days=int(ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS)),
    )
