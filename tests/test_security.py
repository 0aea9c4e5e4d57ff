"""Tests for password hashing and JWT helpers."""

from datetime import timedelta

from travelstory.core.config import Settings
from travelstory.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, secret_key="unit-test-secret", **overrides)


class TestPasswords:
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("correct horse")
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_cost_factor(self) -> None:
        assert hash_password("pw", rounds=4).startswith("$2b$04$")
        assert hash_password("pw").startswith("$2b$10$")

    def test_only_first_72_bytes_count(self) -> None:
        hashed = hash_password("a" * 72, rounds=4)
        assert verify_password("a" * 72 + "ignored", hashed)

    def test_verify_garbage_hash(self) -> None:
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestAccessTokens:
    def test_round_trip_subject(self) -> None:
        settings = _settings()
        token = create_access_token(42, settings=settings)
        payload = decode_access_token(token, settings)
        assert payload is not None
        assert payload["sub"] == "42"
        assert payload["type"] == "access"

    def test_expired_token_rejected(self) -> None:
        settings = _settings()
        token = create_access_token(42, expires_delta=timedelta(seconds=-5), settings=settings)
        assert decode_access_token(token, settings) is None

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token(42, settings=_settings())
        assert decode_access_token(token, _settings(jwt_secret_key="other-secret")) is None

    def test_malformed_token_rejected(self) -> None:
        assert decode_access_token("not.a.token", _settings()) is None

    def test_default_lifetime_is_72_hours(self) -> None:
        settings = _settings()
        payload = decode_access_token(create_access_token(1, settings=settings), settings)
        assert payload["exp"] - payload["iat"] == 72 * 3600
