"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    UserRole,
    SubscriptionTier,
    OTPPurpose,
)

# Export all entities
from .company import Company
from .user import User
from .pending_registration import PendingRegistration
from .otp import OTPChallenge
from .refresh_session import RefreshSession

__all__ = [
    # Enums
    "UserRole",
    "SubscriptionTier",
    "OTPPurpose",
    # Entities
    "Company",
    "User",
    "PendingRegistration",
    "OTPChallenge",
    "RefreshSession",
]
