"""
Company Entity

Represents a customer organisation (the tenant).
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from .enums import SubscriptionTier

if TYPE_CHECKING:
    from .user import User


class Company(SQLModel, table=True):
    """
    Company entity - isolated workspace for a construction business.

    Business Rules:
    - Company email is unique across all companies
    - Created only by promoting a verified pending registration
    - Starts on the free tier with a 30 day trial window
    - Inactive companies cannot sign in
    """

    __tablename__ = "companies"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    abn: Optional[str] = Field(default=None, max_length=20)

    subscription_tier: SubscriptionTier = Field(default=SubscriptionTier.free)
    is_active: bool = Field(default=True)
    trial_ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    users: list["User"] = Relationship(back_populates="company")

    __table_args__ = (Index("idx_company_is_active", "is_active"),)
