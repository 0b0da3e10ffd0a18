"""
Centralized configuration for SecretVault.

All configuration is loaded from environment variables with sensible defaults.
A ``.env`` file in the working directory is honoured for local development.

Usage:
    from secretvault.config import get_config
    cfg = get_config()
    print(cfg.data_path)     # "data/vault.json" or $SECRETVAULT_DATA_PATH
    print(cfg.port)          # 3000 or $PORT
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_FRONTEND_DIR = PACKAGE_DIR / "frontend"
DEFAULT_DATA_PATH = Path("data") / "vault.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Top-level SecretVault configuration."""

    # Storage
    data_path: Path = DEFAULT_DATA_PATH
    serialize_writes: bool = True

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    max_body_bytes: int = 1_000_000
    frontend_dir: Path = field(default_factory=lambda: DEFAULT_FRONTEND_DIR)

    # Logging
    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def log_level_value(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the singleton config from environment variables."""
    global _config
    if _config is not None:
        return _config
    _config = _load_from_env()
    return _config


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _load_from_env() -> Config:
    """Load configuration from environment variables."""
    load_dotenv(Path.cwd() / ".env", override=False)

    # PORT wins over SECRETVAULT_PORT so the service runs unchanged on hosts
    # that inject PORT.
    port = os.environ.get("PORT") or os.environ.get("SECRETVAULT_PORT") or "3000"

    return Config(
        data_path=Path(os.environ.get("SECRETVAULT_DATA_PATH", str(DEFAULT_DATA_PATH))),
        serialize_writes=_env_bool("SECRETVAULT_SERIALIZE_WRITES", True),
        host=os.environ.get("SECRETVAULT_HOST", "127.0.0.1"),
        port=int(port),
        max_body_bytes=int(os.environ.get("SECRETVAULT_MAX_BODY_BYTES", "1000000")),
        frontend_dir=Path(os.environ.get("SECRETVAULT_FRONTEND_DIR", str(DEFAULT_FRONTEND_DIR))),
        log_level=os.environ.get("SECRETVAULT_LOG_LEVEL", "INFO"),
    )


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None
