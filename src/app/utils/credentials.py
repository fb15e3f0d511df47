"""
Credential utilities

Password hashing and strength rules, email format checks, and the
refresh-token digest used as the session lookup key. Pure functions.
"""

import hashlib
import re
from typing import List, Optional

import bcrypt
from pydantic import BaseModel

from config import ApplicationConfig

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

# Compared against when the account does not exist so both paths cost one bcrypt check
_dummy_hash: Optional[bytes] = None


class PasswordStrength(BaseModel):
    is_valid: bool
    errors: List[str]


def hash_password(plain: str) -> str:
    """Hash a password with bcrypt (cost from BCRYPT_ROUNDS, default 12)."""
    rounds = int(ApplicationConfig.BCRYPT_ROUNDS)
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(plain: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def burn_password_check(plain: str) -> None:
    """Spend one bcrypt comparison without a real hash."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("dummy_password").encode("utf-8")
    bcrypt.checkpw(plain.encode("utf-8"), _dummy_hash)


def validate_password_strength(plain: str) -> PasswordStrength:
    """
    Check a password against every rule and report all violations.

    Rules: at least 8 characters, one uppercase letter, one lowercase
    letter, one digit, and one character from SPECIAL_CHARACTERS.
    """
    errors = []

    if len(plain) < 8:
        errors.append("Password must be at least 8 characters long")

    if not re.search(r"[A-Z]", plain):
        errors.append("Password must contain at least one uppercase letter")

    if not re.search(r"[a-z]", plain):
        errors.append("Password must contain at least one lowercase letter")

    if not re.search(r"[0-9]", plain):
        errors.append("Password must contain at least one number")

    if not any(char in SPECIAL_CHARACTERS for char in plain):
        errors.append("Password must contain at least one special character")

    return PasswordStrength(is_valid=not errors, errors=errors)


def validate_email_format(value: str) -> bool:
    return bool(value) and _EMAIL_RE.match(value) is not None


def hash_refresh_token(raw_token: str) -> str:
    """SHA-256 hex digest; the only form of a refresh token that is stored."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def normalize_email(value: str) -> str:
    """Emails are matched case-insensitively and stored lowercased."""
    return value.strip().lower()
