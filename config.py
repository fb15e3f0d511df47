import os
import yaml

from src.domain.errors import ConfigurationError

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default=None):
    """env.yaml wins, then the process environment, then the default."""
    if key in data:
        return data[key]
    value = os.environ.get(key)
    if value is None:
        return default
    if isinstance(default, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        return int(value)
    if isinstance(default, list):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class ApplicationConfig:
    ENVIRONMENT = _get("ENVIRONMENT", "development")
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./site_tasker.db")
    AUTO_CREATE_TABLES = bool(_get("AUTO_CREATE_TABLES", True))
    API_PREFIX = _get("API_PREFIX", "/api")
    API_PORT = _get("API_PORT", 8000)
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = bool(_get("CORS_ALLOW_CREDENTIALS", True))
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")

    # Tokens
    JWT_ACCESS_SECRET = _get("JWT_ACCESS_SECRET")
    JWT_REFRESH_SECRET = _get("JWT_REFRESH_SECRET")
    JWT_ALGORITHM = _get("JWT_ALGORITHM", "HS256")
    JWT_ISSUER = _get("JWT_ISSUER", "site-tasker-api")
    ACCESS_TOKEN_EXPIRE_MINUTES = _get("ACCESS_TOKEN_EXPIRE_MINUTES", 60)
    REFRESH_TOKEN_EXPIRE_DAYS = _get("REFRESH_TOKEN_EXPIRE_DAYS", 7)
    BCRYPT_ROUNDS = _get("BCRYPT_ROUNDS", 12)

    # OTP and signup
    OTP_EXPIRY_MINUTES = _get("OTP_EXPIRY_MINUTES", 10)
    OTP_MAX_ATTEMPTS = _get("OTP_MAX_ATTEMPTS", 5)
    STATIC_OTP = _get("STATIC_OTP")
    PENDING_REGISTRATION_TTL_HOURS = _get("PENDING_REGISTRATION_TTL_HOURS", 24)
    TRIAL_PERIOD_DAYS = _get("TRIAL_PERIOD_DAYS", 30)
    CLEANUP_INTERVAL_SECONDS = _get("CLEANUP_INTERVAL_SECONDS", 0)

    # Email
    APP_NAME = _get("APP_NAME", "Site Tasker")
    SEND_EMAILS = bool(_get("SEND_EMAILS", False))
    RESEND_API_KEY = _get("RESEND_API_KEY")
    EMAIL_FROM = _get("EMAIL_FROM", "Site Tasker <noreply@sitetasker.com>")
    EMAIL_SEND_TIMEOUT_SECONDS = _get("EMAIL_SEND_TIMEOUT_SECONDS", 10)


def is_production(config) -> bool:
    return str(config.ENVIRONMENT).lower() == "production"


def validate_config(config) -> None:
    """Fail at startup instead of on the first sign-in."""
    missing = [
        key
        for key in ("JWT_ACCESS_SECRET", "JWT_REFRESH_SECRET")
        if not getattr(config, key, None)
    ]
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")
