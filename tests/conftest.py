"""Shared fixtures: an app wired to a throwaway SQLite database."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from travelstory.api.main import create_app
from travelstory.core.config import Settings

from .helpers import register


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'travelstory.db'}",
        database_create_tables=True,
        secret_key="test-secret",
        bcrypt_rounds=4,
        uploads_dir=str(tmp_path / "uploads"),
        public_base_url="http://testserver",
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def owner(client: TestClient) -> dict[str, str]:
    return register(client, "Ursula One", "u1@example.com")


@pytest.fixture
def friend(client: TestClient) -> dict[str, str]:
    return register(client, "Umar Two", "u2@example.com")


@pytest.fixture
def stranger(client: TestClient) -> dict[str, str]:
    return register(client, "Una Three", "u3@example.com")
