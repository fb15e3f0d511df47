from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from config import ApplicationConfig, is_production
from src.api.error import ClientError, ServerError, raise_for_error
from src.api.utils.auth import authenticate, optional_auth, require_admin
from src.api.utils.envelope import success
from src.api.utils.jwt import TokenPayload
from src.app.services.clock import IClock
from src.app.services.email_service import IEmailService
from src.app.services.otp_service import OTPService
from src.app.services.pending_registration_service import PendingRegistrationService
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ClientInfo,
    CreateUserCommand,
    CreateUserUseCase,
    GetCurrentUserUseCase,
    RefreshTokenUseCase,
    RequestPasswordResetUseCase,
    ResendOTPUseCase,
    ResetPasswordUseCase,
    SignInUseCase,
    SignOutAllUseCase,
    SignOutUseCase,
    SignupCommand,
    SignupUseCase,
    VerifyOTPUseCase,
)
from src.depends import (
    get_clock,
    get_email_service,
    get_otp_service,
    get_pending_registration_service,
    get_session_service,
    get_unit_of_work,
)
from src.libs.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])

REFRESH_COOKIE = "refreshToken"
OTP_CODE_PATTERN = r"^\s*[0-9]+\s*$"

ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_EMAIL": status.HTTP_400_BAD_REQUEST,
    "OTP_INVALID": status.HTTP_400_BAD_REQUEST,
    "REGISTRATION_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "CANNOT_CREATE_ADMIN": status.HTTP_400_BAD_REQUEST,
    "USER_NOT_FOUND": status.HTTP_400_BAD_REQUEST,
    "COMPANY_NOT_FOUND": status.HTTP_400_BAD_REQUEST,
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "COMPANY_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "USER_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "INVALID_REFRESH_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "USER_INACTIVE": status.HTTP_401_UNAUTHORIZED,
    "COMPANY_INACTIVE": status.HTTP_403_FORBIDDEN,
}


def _client_info(request: Request) -> ClientInfo:
    return ClientInfo(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


def _set_refresh_cookie(response: Response, refresh_token: str):
    response.set_cookie(
        REFRESH_COOKIE,
        refresh_token,
        max_age=int(ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS) * 24 * 60 * 60,
        httponly=True,
        secure=is_production(ApplicationConfig),
        samesite="strict",
    )


def _clear_refresh_cookie(response: Response):
    response.delete_cookie(
        REFRESH_COOKIE,
        httponly=True,
        secure=is_production(ApplicationConfig),
        samesite="strict",
    )


class CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(CamelRequest):
    """
    Signup HTTP request payload

    Shape validation only; password strength and the stricter email rules
    are business rules checked by the use case.
    """

    email: EmailStr
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    company_name: str = Field(..., min_length=1, max_length=255)
    company_email: EmailStr
    company_phone: Optional[str] = Field(None, max_length=20)
    company_abn: Optional[str] = Field(None, max_length=20)


class VerifyOTPRequest(CamelRequest):
    email: EmailStr
    otp_code: str = Field(..., min_length=1, max_length=10, pattern=OTP_CODE_PATTERN)


class EmailRequest(CamelRequest):
    email: EmailStr


class SignInRequest(CamelRequest):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(CamelRequest):
    refresh_token: Optional[str] = None


class CreateUserRequest(CamelRequest):
    email: EmailStr
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: str
    phone: Optional[str] = Field(None, max_length=20)
    employee_id: Optional[str] = Field(None, max_length=50)


class ResetPasswordRequest(CamelRequest):
    email: EmailStr
    otp_code: str = Field(..., min_length=1, max_length=10, pattern=OTP_CODE_PATTERN)
    new_password: str = Field(..., min_length=1)


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    pending_registrations: PendingRegistrationService = Depends(
        get_pending_registration_service
    ),
    otp_service: OTPService = Depends(get_otp_service),
):
    """
    Start a signup.

    Stages the company/admin draft and emails a verification code. No
    account or token exists until /auth/verify-otp succeeds.

    Raises:
        - 400 Bad Request: invalid email or weak password
        - 409 Conflict: email or company email already in use
    """
    command = SignupCommand(**body.model_dump())

    use_case = SignupUseCase(uow, pending_registrations, otp_service)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error, ERROR_STATUS)

    return success(
        result.value.message,
        {"email": result.value.email, "requiresOTP": result.value.requires_otp},
    )


@router.post("/verify-otp", status_code=status.HTTP_200_OK)
async def verify_otp(
    body: VerifyOTPRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    otp_service: OTPService = Depends(get_otp_service),
    pending_registrations: PendingRegistrationService = Depends(
        get_pending_registration_service
    ),
    session_service: SessionService = Depends(get_session_service),
    email_service: IEmailService = Depends(get_email_service),
    clock: IClock = Depends(get_clock),
):
    """
    Complete a signup with the emailed code.

    Creates the company and its admin, returns the access token in the
    body and the refresh token as an HTTP-only cookie.

    Raises:
        - 400 Bad Request: wrong/expired code or expired registration
        - 409 Conflict: the email or company email was taken while the
          registration was pending; the registration is discarded
    """
    use_case = VerifyOTPUseCase(
        uow, otp_service, pending_registrations, session_service, email_service, clock
    )
    result = await use_case.execute(body.email, body.otp_code, _client_info(request))

    if result.is_err():
        raise_for_error(result.error, ERROR_STATUS)

    _set_refresh_cookie(response, result.value.refresh_token)
    return success("Account verified successfully", result.value)


@router.post("/resend-otp", status_code=status.HTTP_200_OK)
async def resend_otp(
    body: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    otp_service: OTPService = Depends(get_otp_service),
    pending_registrations: PendingRegistrationService = Depends(
        get_pending_registration_service
    ),
):
    use_case = ResendOTPUseCase(uow, otp_service, pending_registrations)
    result = await use_case.execute(body.email)

    if result.is_err():
        raise_for_error(result.error, ERROR_STATUS)

    return success(result.value.message)


@router.post("/signin", status_code=status.HTTP_200_OK)
async def signin(
    body: SignInRequest,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_service: SessionService = Depends(get_session_service),
    clock: IClock = Depends(get_clock),
):
    """
    Sign in with email and password.

    Raises:
        - 401 Unauthorized: invalid credentials
        - 403 Forbidden: company is inactive
    """
    use_case = SignInUseCase(uow, session_service, clock)
    result = await use_case.execute(body.email, body.password, _client_info(request))

    if result.is_err():
        raise_for_error(result.error, ERROR_STATUS)

    _set_refresh_cookie(response, result.value.refresh_token)
    return success("Login successful", result.value)


@router.post("/refresh", status_code=status.HTTP_200_OK)
async def refresh(
    request: Request,
    body: Optional[RefreshRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_service: SessionService = Depends(get_session_service),
):
    """
    Mint a new access token from the refresh cookie (or body refreshToken).

    The refresh token is not rotated.

    Raises:
        - 401 Unauthorized: missing, invalid, revoked or expired refresh token
    """
    refresh_token = request.cookies.get(REFRESH_COOKIE) or (
        body.refresh_token if body else None
    )
    if not refresh_token:
        raise ClientError(
            Error("INVALID_REFRESH_TOKEN", "Refresh token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = RefreshTokenUseCase(uow, session_service)
    result = await use_case.execute(refresh_token)

    if result.is_err():
        raise_for_error(result.error, ERROR_STATUS)

    return success("Access token refreshed", result.value)


@router.post("/signout", status_code=status.HTTP_200_OK)
async def signout(
    request: Request,
    response: Response,
    body: Optional[RefreshRequest] = None,
    user: Optional[TokenPayload] = Depends(optional_auth),
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_service: SessionService = Depends(get_session_service),
):
    """Revoke the presented refresh token and clear the cookie. Always 200."""
    refresh_token = request.cookies.get(REFRESH_COOKIE) or (
        body.refresh_token if body else None
    )

    use_case = SignOutUseCase(uow, session_service)
    result = await use_case.execute(
        refresh_token, user_id=UUID(user.user_id) if user else None
    )

    if result.is_err():
        raise ServerError(result.error)

    _clear_refresh_cookie(response)
    return success(result.value.message)


@router.post("/signout-all", status_code=status.HTTP_200_OK)
async def signout_all(
    response: Response,
    user: TokenPayload = Depends(authenticate),
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_service: SessionService = Depends(get_session_service),
):
    use_case = SignOutAllUseCase(uow, session_service)
    result = await use_case.execute(UUID(user.user_id))

    if result.is_err():
        raise ServerError(result.error)

    _clear_refresh_cookie(response)
    return success("Signed out from all devices", result.value)


@router.get("/me", status_code=status.HTTP_200_OK)
async def me(
    user: TokenPayload = Depends(authenticate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetCurrentUserUseCase(uow)
    result = await use_case.execute(UUID(user.user_id))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return success(
        "User profile retrieved",
        {"user": result.value.model_dump(mode="json", by_alias=True)},
    )


@router.post("/create-user", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: CreateUserRequest,
    admin: TokenPayload = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: IClock = Depends(get_clock),
):
    """
    Create a site manager, worker or client in the admin's company.

    Raises:
        - 403 Forbidden: caller is not an admin
        - 400 Bad Request: role=admin, weak password, invalid email
        - 409 Conflict: email already in use
    """
    command = CreateUserCommand(**body.model_dump())

    use_case = CreateUserUseCase(uow, clock)
    result = await use_case.execute(UUID(admin.company_id), command)

    if result.is_err():
        raise_for_error(result.error, ERROR_STATUS)

    return success(
        "User created successfully",
        {"user": result.value.model_dump(mode="json", by_alias=True)},
    )


@router.post("/forgot-password", status_code=status.HTTP_200_OK)
async def forgot_password(
    body: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    otp_service: OTPService = Depends(get_otp_service),
):
    """Always answers with the same message, registered email or not."""
    use_case = RequestPasswordResetUseCase(uow, otp_service)
    result = await use_case.execute(body.email)

    if result.is_err():
        raise ServerError(result.error)

    return success(result.value.message)


@router.post("/reset-password", status_code=status.HTTP_200_OK)
async def reset_password(
    body: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    otp_service: OTPService = Depends(get_otp_service),
    session_service: SessionService = Depends(get_session_service),
):
    """
    Set a new password with a password_reset code.

    Every existing refresh session of the user is revoked.
    """
    use_case = ResetPasswordUseCase(uow, otp_service, session_service)
    result = await use_case.execute(body.email, body.otp_code, body.new_password)

    if result.is_err():
        raise_for_error(result.error, ERROR_STATUS)

    return success(result.value.message)
