"""
Shared fixtures for the SecretVault test suite.

Provides stores (in-memory and tmp_path-backed), a controllable clock, and an
async HTTP client wrapping the FastAPI app via ASGITransport.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

from secretvault.api.app import create_app
from secretvault.config import Config
from secretvault.vault.store import InMemoryVaultStore, JsonFileVaultStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 19, 9, 30, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "vault.json"


@pytest.fixture
def file_store(vault_path: Path, clock: FakeClock) -> JsonFileVaultStore:
    return JsonFileVaultStore(vault_path, clock=clock)


@pytest.fixture
def memory_store(clock: FakeClock) -> InMemoryVaultStore:
    return InMemoryVaultStore(clock=clock)


@pytest.fixture
def credential_payload() -> dict:
    return {
        "type": "credential",
        "name": "Example",
        "details": {
            "site": "https://example.com",
            "username": "alice",
            "password": "hunter2",
        },
    }


@pytest.fixture
def frontend_dir(tmp_path: Path) -> Path:
    root = tmp_path / "frontend"
    root.mkdir()
    (root / "index.html").write_text("<html><body>vault ui</body></html>")
    (root / "main.js").write_text("console.log('vault');")
    return root


@pytest.fixture
def app_config(vault_path: Path, frontend_dir: Path) -> Config:
    return Config(data_path=vault_path, frontend_dir=frontend_dir, max_body_bytes=2048)


@pytest_asyncio.fixture
async def test_client(file_store: JsonFileVaultStore, app_config: Config):
    """Async HTTP client wrapping the app, backed by a tmp_path vault file."""
    app = create_app(store=file_store, config=app_config)
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
