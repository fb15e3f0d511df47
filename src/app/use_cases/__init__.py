"""
Use Cases

Organized into domain folders:
- auth/: Signup, sign-in, sessions and password reset
- companies/: Company-scoped reads

Import from subdirectories for better organization.
"""

from .auth import (
    SignupUseCase,
    VerifyOTPUseCase,
    ResendOTPUseCase,
    SignInUseCase,
    RefreshTokenUseCase,
    SignOutUseCase,
    SignOutAllUseCase,
    CreateUserUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    GetCurrentUserUseCase,
    CleanupExpiredUseCase,
)
from .companies import (
    GetCompanyUseCase,
    ListCompanyUsersUseCase,
)

__all__ = [
    # Auth
    "SignupUseCase",
    "VerifyOTPUseCase",
    "ResendOTPUseCase",
    "SignInUseCase",
    "RefreshTokenUseCase",
    "SignOutUseCase",
    "SignOutAllUseCase",
    "CreateUserUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "GetCurrentUserUseCase",
    "CleanupExpiredUseCase",
    # Companies
    "GetCompanyUseCase",
    "ListCompanyUsersUseCase",
]
