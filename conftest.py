"""
Root-level shared test fixtures.

Keeps SECRETVAULT_* settings from the developer's shell or .env out of the
test run and resets the config singleton around every test.
"""

from __future__ import annotations

import pytest

from secretvault.config import reset_config

_ENV_KEYS = [
    "PORT",
    "SECRETVAULT_DATA_PATH",
    "SECRETVAULT_FRONTEND_DIR",
    "SECRETVAULT_HOST",
    "SECRETVAULT_PORT",
    "SECRETVAULT_MAX_BODY_BYTES",
    "SECRETVAULT_SERIALIZE_WRITES",
    "SECRETVAULT_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove env vars that leak between tests and reset the config singleton."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()
