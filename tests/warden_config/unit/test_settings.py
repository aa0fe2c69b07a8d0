"""Unit tests for Settings and duration parsing."""

from datetime import timedelta

import pytest
from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError

from warden_config.settings import INSECURE_JWT_SECRET, Settings, parse_duration


class TestParseDuration:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("30d", timedelta(days=30)),
            ("12h", timedelta(hours=12)),
            ("15m", timedelta(minutes=15)),
            ("2w", timedelta(weeks=2)),
            ("900", timedelta(seconds=900)),
            (60, timedelta(seconds=60)),
        ],
    )
    def test_valid_durations(self, value, expected):
        assert parse_duration(value) == expected

    def test_invalid_duration_raises(self):
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration("thirty days")


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.jwt_expiration_delta == timedelta(days=30)
        assert settings.bcrypt_rounds == 10
        assert settings.verification_token_ttl_hours == 48
        assert settings.password_reset_token_ttl_hours == 1
        assert settings.password_reset_max_requests == 3

    def test_insecure_secret_is_flagged(self):
        settings = Settings(_env_file=None, jwt_secret_key=SecretStr(INSECURE_JWT_SECRET))
        assert settings.uses_insecure_jwt_secret

        settings = Settings(_env_file=None, jwt_secret_key=SecretStr("a-real-secret"))
        assert not settings.uses_insecure_jwt_secret

    def test_database_url_override_wins(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///data/warden.db")

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///data/warden.db"

    def test_database_url_from_components(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        settings = Settings(
            _env_file=None,
            postgres_host="db",
            postgres_user="warden",
            postgres_password=SecretStr("pw"),
            postgres_db="auth",
        )

        assert settings.database_url == "postgresql+asyncpg://warden:pw@db:5432/auth"

    def test_cors_origins_parsed_from_comma_list(self):
        settings = Settings(
            _env_file=None,
            api_cors_origins="http://a.test, http://b.test,",
        )

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_bad_jwt_expiration_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, jwt_expiration="forever")

    def test_bcrypt_rounds_bounds(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, bcrypt_rounds=3)
