"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of a user within their company"""

    admin = "admin"
    site_manager = "site_manager"
    worker = "worker"
    client = "client"


class SubscriptionTier(str, Enum):
    """Company subscription tier"""

    free = "free"
    standard = "standard"
    plus = "plus"
    enterprise = "enterprise"


class OTPPurpose(str, Enum):
    """What a one-time code proves control of the email for"""

    email_verification = "email_verification"
    password_reset = "password_reset"
    two_factor = "two_factor"
