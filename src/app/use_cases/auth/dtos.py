"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.entities import Company, User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(CamelModel):
    """Signup intent, already shape-validated by the API layer"""

    email: str
    password: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    company_name: str
    company_email: str
    company_phone: Optional[str] = None
    company_abn: Optional[str] = None


class CreateUserCommand(CamelModel):
    """Admin-issued user creation; company_id is the admin's own company"""

    email: str
    password: str
    first_name: str
    last_name: str
    role: str
    phone: Optional[str] = None
    employee_id: Optional[str] = None


class ClientInfo(BaseModel):
    """Where a session was opened from"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class SignupResponse(CamelModel):
    email: str
    requires_otp: bool = Field(default=True, alias="requiresOTP")
    message: str


class UserProfile(CamelModel):
    """User as returned by verify-otp, signin and me"""

    user_id: str
    email: str
    first_name: str
    last_name: str
    role: str
    company_id: str
    company_name: Optional[str] = None
    is_active: bool

    @classmethod
    def from_entities(cls, user: User, company: Optional[Company]) -> "UserProfile":
        return cls(
            user_id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            company_id=str(user.company_id),
            company_name=company.name if company else None,
            is_active=user.is_active,
        )


class AuthResponse(CamelModel):
    """Successful sign-in or signup completion; refresh_token goes to a cookie"""

    user: UserProfile
    access_token: str
    refresh_token: str = Field(exclude=True)


class RefreshTokenResponse(CamelModel):
    access_token: str


class MessageResponse(CamelModel):
    message: str


class CreatedUserResponse(CamelModel):
    user_id: str
    email: str
    first_name: str
    last_name: str
    role: str
    company_id: str
    phone: Optional[str] = None
    employee_id: Optional[str] = None
    is_active: bool


class SignOutAllResponse(CamelModel):
    revoked_sessions: int


class CleanupResponse(CamelModel):
    otps_deleted: int
    sessions_deleted: int
