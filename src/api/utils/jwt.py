import uuid
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel

from config import ApplicationConfig
from src.domain.errors import ConfigurationError, ExpiredTokenError, InvalidTokenError


class TokenPayload(BaseModel):
    """Identity claims carried by both access and refresh tokens"""

    user_id: str
    email: str
    role: str
    company_id: str


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str


def _require_secret(name: str) -> str:
    secret = getattr(ApplicationConfig, name, None)
    if not secret:
        raise ConfigurationError(f"{name} is not configured")
    return secret


def _encode(payload: TokenPayload, secret: str, expires_delta: timedelta, **extra) -> str:
    now = datetime.now(UTC)
    claims = {
        **payload.model_dump(),
        **extra,
        "iss": ApplicationConfig.JWT_ISSUER,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, secret, algorithm=ApplicationConfig.JWT_ALGORITHM)


def _decode(token: str, secret: str) -> TokenPayload:
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
            issuer=ApplicationConfig.JWT_ISSUER,
        )
    except ExpiredSignatureError as exc:
        raise ExpiredTokenError("Token has expired") from exc
    except JWTError as exc:
        raise InvalidTokenError("Token is invalid") from exc

    try:
        return TokenPayload(
            user_id=claims["user_id"],
            email=claims["email"],
            role=claims["role"],
            company_id=claims["company_id"],
        )
    except KeyError as exc:
        raise InvalidTokenError("Token is missing identity claims") from exc


def sign_access_token(
    payload: TokenPayload, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Sign a short-lived access token.

    Args:
        payload: Identity claims
        expires_delta: Override of ACCESS_TOKEN_EXPIRE_MINUTES (default 1 hour)

    Raises:
        ConfigurationError: JWT_ACCESS_SECRET is not set
    """
    secret = _require_secret("JWT_ACCESS_SECRET")
    if expires_delta is None:
        expires_delta = timedelta(minutes=int(ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES))
    return _encode(payload, secret, expires_delta)


def sign_refresh_token(
    payload: TokenPayload, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Sign a long-lived refresh token.

    Each token carries a random jti so tokens minted in the same second
    for the same user still hash to different session keys.

    Raises:
        ConfigurationError: JWT_REFRESH_SECRET is not set
    """
    secret = _require_secret("JWT_REFRESH_SECRET")
    if expires_delta is None:
        expires_delta = timedelta(days=int(ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS))
    return _encode(payload, secret, expires_delta, jti=uuid.uuid4().hex)


def sign_token_pair(payload: TokenPayload) -> TokenPair:
    return TokenPair(
        access_token=sign_access_token(payload),
        refresh_token=sign_refresh_token(payload),
    )


def verify_access_token(token: str) -> TokenPayload:
    """
    Raises:
        InvalidTokenError: bad signature, issuer or claims
        ExpiredTokenError: token is past its exp claim
    """
    return _decode(token, _require_secret("JWT_ACCESS_SECRET"))


def verify_refresh_token(token: str) -> TokenPayload:
    """Same contract as verify_access_token, with the refresh secret."""
    return _decode(token, _require_secret("JWT_REFRESH_SECRET"))


def extract_bearer_token(header_value: Optional[str]) -> Optional[str]:
    """Return the token from an exact "Bearer <token>" header, else None."""
    if not header_value or not header_value.startswith("Bearer "):
        return None
    token = header_value[len("Bearer "):]
    if not token or " " in token:
        return None
    return token
