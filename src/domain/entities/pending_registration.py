"""
PendingRegistration Entity

Staged signup awaiting email verification.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class PendingRegistration(SQLModel, table=True):
    """
    PendingRegistration entity - unconfirmed company + admin draft.

    Business Rules:
    - At most one draft per email; a new signup replaces the old one
    - Password is already hashed when staged
    - Expires after 24 hours and is deleted when touched afterwards
    - Promoted into Company + User once the email OTP is verified
    """

    __tablename__ = "pending_registrations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)

    company_name: str = Field(max_length=255)
    company_email: str = Field(max_length=255)
    company_phone: Optional[str] = Field(default=None, max_length=20)
    company_abn: Optional[str] = Field(default=None, max_length=20)

    verification_token: str = Field(unique=True, max_length=64)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_pending_registration_expires_at", "expires_at"),)
