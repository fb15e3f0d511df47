from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import OTPChallenge, OTPPurpose


class IOTPRepository(ABC):
    """OTPChallenge repository interface - application layer"""

    @abstractmethod
    async def create(self, otp: OTPChallenge) -> OTPChallenge:
        """Persist a new challenge"""
        pass

    @abstractmethod
    async def get_latest_pending(
        self, email: str, purpose: OTPPurpose
    ) -> Optional[OTPChallenge]:
        """Most recently created challenge with verified_at NULL"""
        pass

    @abstractmethod
    async def close_pending(self, email: str, purpose: OTPPurpose, now: datetime) -> int:
        """Set verified_at on every pending challenge for the pair. Returns count."""
        pass

    @abstractmethod
    async def consume_attempt(self, otp_id: UUID) -> Optional[int]:
        """
        Atomically increment attempts if still below max_attempts.

        Returns the new attempt count, or None if the challenge was already
        exhausted (or no longer exists).
        """
        pass

    @abstractmethod
    async def mark_verified(self, otp_id: UUID, now: datetime) -> bool:
        """Set verified_at if still pending. Returns True if this call closed it."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every challenge past expiry. Returns count."""
        pass
