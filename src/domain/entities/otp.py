"""
OTPChallenge Entity

One-time numeric codes scoped to (email, purpose).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import OTPPurpose


class OTPChallenge(SQLModel, table=True):
    """
    OTPChallenge entity - a pending or consumed one-time code.

    Business Rules:
    - Pending while verified_at is NULL
    - At most one pending challenge per (email, purpose)
    - Expires 10 minutes after creation by default
    - Every verification check consumes one attempt (max 5)
    """

    __tablename__ = "otps"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(index=True, max_length=255)
    purpose: OTPPurpose
    code: str = Field(max_length=10)

    attempts: int = Field(default=0)
    max_attempts: int = Field(default=5)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_otp_email_purpose", "email", "purpose"),
        Index("idx_otp_expires_at", "expires_at"),
    )
