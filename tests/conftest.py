"""Root pytest configuration.

Test Structure:
    tests/
    ├── warden_auth/           # Hashing, session tokens, token values
    │   └── unit/
    ├── warden_config/         # Settings parsing
    │   └── unit/
    ├── warden_identity/       # Auth engine, validation, persistence
    │   ├── unit/              # Fast, isolated tests (mocked store)
    │   └── integration/       # Repositories against in-memory SQLite
    ├── warden/                # HTTP API and CLI
    │   └── integration/
    └── shared/                # Shared fixtures and utilities

Integration tests run against an in-memory SQLite database, so they need
no external services and are not skipped by default.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from warden_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that exercise the database or the HTTP stack",
    )


@pytest.fixture(autouse=True)
def configure_app_settings():
    """Give every test a fresh settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()
