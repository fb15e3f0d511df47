"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .verify_otp_use_case import VerifyOTPUseCase
from .resend_otp_use_case import ResendOTPUseCase
from .signin_use_case import SignInUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .signout_use_case import SignOutUseCase
from .signout_all_use_case import SignOutAllUseCase
from .create_user_use_case import CreateUserUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .get_current_user_use_case import GetCurrentUserUseCase
from .cleanup_expired_use_case import CleanupExpiredUseCase
from .dtos import (
    AuthResponse,
    ClientInfo,
    CreateUserCommand,
    CreatedUserResponse,
    MessageResponse,
    RefreshTokenResponse,
    SignOutAllResponse,
    SignupCommand,
    SignupResponse,
    UserProfile,
)
