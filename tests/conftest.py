import pytest

from config import ApplicationConfig

TEST_ACCESS_SECRET = "test-access-secret"
TEST_REFRESH_SECRET = "test-refresh-secret"


@pytest.fixture(autouse=True)
def app_config(monkeypatch):
    """Signing secrets for every test, and cheap bcrypt."""
    monkeypatch.setattr(ApplicationConfig, "ENVIRONMENT", "test")
    monkeypatch.setattr(ApplicationConfig, "JWT_ACCESS_SECRET", TEST_ACCESS_SECRET)
    monkeypatch.setattr(ApplicationConfig, "JWT_REFRESH_SECRET", TEST_REFRESH_SECRET)
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)
    monkeypatch.setattr(ApplicationConfig, "STATIC_OTP", None)
    monkeypatch.setattr(ApplicationConfig, "SEND_EMAILS", False)
    return ApplicationConfig
