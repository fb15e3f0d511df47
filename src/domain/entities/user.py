"""
User Entity

Represents a person belonging to exactly one company.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from .enums import UserRole

if TYPE_CHECKING:
    from .company import Company


class User(SQLModel, table=True):
    """
    User entity - an identity inside one company.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - Exactly one admin per company, created by signup
    - Further users are created by an admin and are never admins
    - Never hard-deleted; deactivated through is_active
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: UUID = Field(foreign_key="companies.id", nullable=False, index=True)

    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)
    employee_id: Optional[str] = Field(default=None, max_length=50)

    role: UserRole
    is_active: bool = Field(default=True)

    email_verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    company: Optional["Company"] = Relationship(back_populates="users")

    __table_args__ = (Index("idx_user_company_role", "company_id", "role"),)
