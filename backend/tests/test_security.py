"""
Tests for core/security.py (password hashing, JWT) and core/config.py parsing.
"""

import pytest
from jose import jwt

from lifeshare.core.config import Settings, settings
from lifeshare.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


def test_hash_and_verify_password():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert hashed.startswith("$2")
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_same_password_hashes_differently():
    assert hash_password("pw") != hash_password("pw")


def test_token_round_trip():
    token = create_access_token({"sub": "12"})
    payload = decode_token(token)
    assert payload["sub"] == "12"
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "1"}, expires_minutes=-1)
    assert decode_token(token) is None


def test_token_signed_with_other_key_is_rejected():
    forged = jwt.encode({"sub": "1"}, "not-the-secret", algorithm="HS256")
    assert decode_token(forged) is None


def test_garbage_token_is_rejected():
    assert decode_token("not.a.token") is None


def test_settings_defaults():
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.LATEST_DONORS_DEFAULT_LIMIT == 3


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    assert Settings().CORS_ORIGINS == ["http://a.test", "http://b.test"]


def test_cors_origins_from_json_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", '["http://a.test"]')
    assert Settings().CORS_ORIGINS == ["http://a.test"]


def test_jwt_secret_is_stripped(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "  padded  ")
    assert Settings().JWT_SECRET_KEY == "padded"


@pytest.mark.parametrize("secret", ["lifeshare-secret", "   "])
def test_production_refuses_default_secret(monkeypatch, secret):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("JWT_SECRET_KEY", secret)
    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        Settings()


def test_production_accepts_custom_secret(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "Production")
    monkeypatch.setenv("JWT_SECRET_KEY", "a-real-secret")
    configured = Settings()
    assert configured.is_production
    assert configured.JWT_SECRET_KEY == "a-real-secret"


def test_development_keeps_default_secret(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    assert not Settings().is_production
