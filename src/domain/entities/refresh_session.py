"""
RefreshSession Entity

Server-side record of an issued refresh token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class RefreshSession(SQLModel, table=True):
    """
    RefreshSession entity - proof that a refresh token was issued.

    Business Rules:
    - Only the SHA-256 digest of the refresh token is stored
    - Refresh tokens are not rotated; last_used_at tracks reuse
    - Revoked sessions block token refresh
    - Expires after 7 days; expired rows are purged on the next store
    """

    __tablename__ = "refresh_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex

    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_refresh_session_expires_at", "expires_at"),
        Index("idx_refresh_session_user_revoked", "user_id", "revoked"),
    )
