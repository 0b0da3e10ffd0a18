"""
SecretVault storage layer — validated secret records persisted to a JSON file.

Public API:
    open_store(path)              → JsonFileVaultStore for a vault file
    store.list()                  → all records, in insertion order
    store.get(id)                 → one record (NotFound if unknown)
    store.create(fields)          → new record with fresh id and timestamps
    store.update(id, fields)      → merged record with refreshed updatedAt
    store.delete(id)              → removed record
    validate_secret(fields)       → list of validation errors
"""

from __future__ import annotations

from pathlib import Path

from secretvault.vault.errors import (
    NotFound,
    StorageCorrupted,
    StorageUnavailable,
    ValidationFailed,
    VaultError,
)
from secretvault.vault.models import Record, SecretType, Vault
from secretvault.vault.store import (
    BaseVaultStore,
    InMemoryVaultStore,
    JsonFileVaultStore,
)
from secretvault.vault.validation import validate_secret


def open_store(path: Path | str | None = None, *, serialize_writes: bool | None = None) -> JsonFileVaultStore:
    """Open the file-backed store, defaulting path and locking policy from config."""
    from secretvault.config import get_config

    cfg = get_config()
    return JsonFileVaultStore(
        path if path is not None else cfg.data_path,
        serialize_writes=cfg.serialize_writes if serialize_writes is None else serialize_writes,
    )


__all__ = [
    "BaseVaultStore",
    "InMemoryVaultStore",
    "JsonFileVaultStore",
    "NotFound",
    "Record",
    "SecretType",
    "StorageCorrupted",
    "StorageUnavailable",
    "ValidationFailed",
    "Vault",
    "VaultError",
    "open_store",
    "validate_secret",
]
