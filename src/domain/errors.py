"""
Domain exceptions

Raised below the use-case layer for conditions that are not ordinary
business outcomes: a missing signing secret, a token that fails
verification, or a write that collides with a unique constraint.
"""


class ConfigurationError(Exception):
    """A required setting (e.g. a signing secret) is missing."""


class TokenError(Exception):
    """Base class for token verification failures."""


class InvalidTokenError(TokenError):
    """Bad signature, malformed token, or wrong issuer."""


class ExpiredTokenError(TokenError):
    """Token signature is valid but its exp claim has passed."""


class DuplicateRecordError(Exception):
    """A write violated a unique constraint (e.g. email already taken)."""
