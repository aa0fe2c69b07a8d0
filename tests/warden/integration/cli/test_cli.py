"""Integration tests for the warden CLI."""

import asyncio
from datetime import timedelta

import pytest
from typer.testing import CliRunner

from warden.presentation.cli.app import app
from warden_identity.domain.time import utc_now
from warden_identity.domain.token import TokenType, UserToken
from warden_identity.domain.user import User
from warden_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
    UserTokenRepositorySQLAlchemy,
    create_engine,
    create_session_maker,
)

runner = CliRunner()


@pytest.fixture
def database_url(tmp_path, monkeypatch) -> str:
    """Point the CLI at a throwaway SQLite file."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'warden.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    return url


async def _seed_tokens(database_url: str) -> None:
    engine = create_engine(database_url)
    try:
        async with create_session_maker(engine)() as session:
            user = User.create("test@example.com")
            await UserRepositorySQLAlchemy(session).save(user)
            tokens = UserTokenRepositorySQLAlchemy(session)
            await tokens.create(
                UserToken.issue(
                    user.id,
                    TokenType.PASSWORD_RESET,
                    "0b9c6f7e-2c3d-4e5f-8a9b-0c1d2e3f4a5b",
                    timedelta(hours=1),
                    now=utc_now() - timedelta(hours=2),
                ),
            )
            await tokens.create(
                UserToken.issue(
                    user.id,
                    TokenType.VERIFY_EMAIL,
                    "5a4b3c2d-1e0f-4a9b-8c7d-6e5f4a3b2c1d",
                    timedelta(hours=48),
                ),
            )
            await session.commit()
    finally:
        await engine.dispose()


def test_secrets_generate():
    result = runner.invoke(app, ["secrets", "generate"])

    assert result.exit_code == 0
    assert "JWT_SECRET_KEY=" in result.output
    assert "POSTGRES_PASSWORD=" in result.output


@pytest.mark.integration
def test_db_init_then_cleanup(database_url):
    result = runner.invoke(app, ["db", "init"])
    assert result.exit_code == 0, result.output

    asyncio.run(_seed_tokens(database_url))

    result = runner.invoke(app, ["tokens", "cleanup"])
    assert result.exit_code == 0, result.output
    assert "Deleted 1 expired token(s)" in result.output

    result = runner.invoke(app, ["tokens", "cleanup"])
    assert "Deleted 0 expired token(s)" in result.output


class TestServe:
    def test_serve_uses_configured_address(self, monkeypatch):
        calls = []
        monkeypatch.setattr("uvicorn.run", lambda *args, **kwargs: calls.append((args, kwargs)))
        monkeypatch.setenv("API_HOST", "127.0.0.1")
        monkeypatch.setenv("API_PORT", "9123")

        result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0, result.output
        (args, kwargs), = calls
        assert args == ("warden.presentation.api.app:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9123

    def test_serve_options_override_settings(self, monkeypatch):
        calls = []
        monkeypatch.setattr("uvicorn.run", lambda *args, **kwargs: calls.append(kwargs))

        result = runner.invoke(app, ["serve", "--host", "0.0.0.0", "--port", "8080"])

        assert result.exit_code == 0, result.output
        assert calls[0]["host"] == "0.0.0.0"
        assert calls[0]["port"] == 8080
