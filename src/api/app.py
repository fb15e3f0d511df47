import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from config import validate_config
from src.domain.errors import ConfigurationError
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error = exc.base_error
    content = {"success": False, "code": error.code, "message": error.message}
    if error.details:
        content["errors"] = error.details
    logger.warning(f"Client error: {error.code} - {error.message}")
    return JSONResponse(status_code=exc.status_code, content=content)


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} - {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "code": exc.base_error.code,
            "message": "Internal server error",
        },
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "code": "VALIDATION_ERROR",
            "message": "Validation failed",
            "errors": errors,
        },
    )


async def handle_configuration_error(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "code": "CONFIGURATION_ERROR",
            "message": "Internal server error",
        },
    )


async def run_cleanup_loop(interval_seconds: int):
    """Periodic sweep of expired OTPs and sessions."""
    from src.adapter.services.clock import SystemClock
    from src.app.services.otp_service import OTPService
    from src.app.services.session_service import SessionService
    from src.app.use_cases.auth import CleanupExpiredUseCase
    from src.depends import get_email_service, get_unit_of_work

    while True:
        await asyncio.sleep(interval_seconds)
        try:
            async for uow in get_unit_of_work():
                clock = SystemClock()
                use_case = CleanupExpiredUseCase(
                    uow,
                    OTPService(uow, get_email_service(), clock),
                    SessionService(uow, clock),
                )
                await use_case.execute()
        except Exception:
            logger.exception("Expired record cleanup failed")


def create_app(ApplicationConfig) -> FastAPI:
    validate_config(ApplicationConfig)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from src.depends import engine
        import src.domain.entities  # noqa: F401  registers the tables

        if ApplicationConfig.AUTO_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        cleanup_task = None
        interval = int(ApplicationConfig.CLEANUP_INTERVAL_SECONDS)
        if interval > 0:
            cleanup_task = asyncio.create_task(run_cleanup_loop(interval))
            logger.info(f"Expired record cleanup every {interval}s")

        yield

        if cleanup_task is not None:
            cleanup_task.cancel()
            try:
                await cleanup_task
            except asyncio.CancelledError:
                pass

    app = FastAPI(title="Site Tasker API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, company, health_check

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(company.router, prefix=prefix, tags=["Companies"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(ConfigurationError, handle_configuration_error)

    return app
