"""
Vault Store — whole-file persistence and CRUD over the secret records.

Every operation re-reads the vault and every mutation writes it back in full;
nothing is cached between calls, so back-to-back operations always observe
each other. ``BaseVaultStore`` implements the record lifecycle on top of two
primitives, ``load()`` and ``save()``, which the concrete stores provide:

    JsonFileVaultStore   — production store backed by a JSON file
    InMemoryVaultStore   — drop-in substitute for tests

Concurrency: with ``serialize_writes=True`` (the default) each
read-modify-write cycle holds a per-store ``threading.RLock``, so writers in
one process cannot lose each other's updates. Separate processes sharing a
file are not coordinated: the last full-file write wins.

Usage:
    from secretvault.vault.store import JsonFileVaultStore

    store = JsonFileVaultStore("data/vault.json")
    record = store.create({"type": "misc", "name": "wifi", "details": {"secret": "..."}})
    store.update(record.id, {"name": "home wifi"})
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from secretvault.vault.errors import (
    NotFound,
    StorageCorrupted,
    StorageUnavailable,
    ValidationFailed,
)
from secretvault.vault.models import (
    MUTABLE_FIELDS,
    Record,
    Vault,
    next_timestamp,
    utc_now,
)
from secretvault.vault.validation import validate_secret

logger = logging.getLogger(__name__)


def _new_uuid() -> str:
    return str(uuid.uuid4())


def dump_vault(vault: Vault) -> str:
    """Serialize a vault to its on-disk JSON document."""
    return json.dumps(vault.to_dict(), indent=2)


def parse_vault(raw: bytes | str, source: Path | str) -> Vault:
    """Parse an on-disk JSON document into a Vault.

    Records that fail the Record model, and repeats of an id already seen,
    are skipped with a warning; the remaining records are kept in order.

    Raises:
        StorageCorrupted: if the text is not JSON or does not have the vault shape.
    """
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise StorageCorrupted(source, f"invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise StorageCorrupted(source, "top-level value is not an object")
    if not isinstance(data.get("secrets"), list):
        raise StorageCorrupted(source, '"secrets" is missing or not a list')

    records: list[Record] = []
    seen: set[str] = set()
    for position, item in enumerate(data["secrets"]):
        label = item.get("id") if isinstance(item, dict) else None
        try:
            record = Record.model_validate(item)
        except ValidationError as e:
            logger.warning(
                "Skipping invalid secret %r at position %d in %s: %d invalid field(s)",
                label, position, source, e.error_count(),
            )
            continue
        if record.id in seen:
            logger.warning(
                "Skipping duplicate secret id %r at position %d in %s",
                record.id, position, source,
            )
            continue
        seen.add(record.id)
        records.append(record)

    return Vault(secrets=records)


class BaseVaultStore(ABC):
    """Record lifecycle shared by all stores.

    Args:
        serialize_writes: Hold the store lock across each read-modify-write cycle.
        clock: Returns the current time; injectable for tests.
        id_factory: Returns a fresh identifier; defaults to UUID4 strings.
    """

    def __init__(
        self,
        *,
        serialize_writes: bool = True,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_uuid,
    ) -> None:
        self.serialize_writes = serialize_writes
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.RLock()

    @abstractmethod
    def load(self) -> Vault:
        """Return the current vault. Never returns a shared mutable instance."""

    @abstractmethod
    def save(self, vault: Vault) -> None:
        """Replace the stored vault with ``vault``."""

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        if self.serialize_writes:
            with self._lock:
                yield
        else:
            yield

    def _new_id(self, vault: Vault) -> str:
        while True:
            candidate = self._id_factory()
            if vault.index_of(candidate) is None:
                return candidate

    # ─── Reads ───────────────────────────────────────────────────────────

    def list(self) -> list[Record]:
        """All records in stored order."""
        return self.load().secrets

    def get(self, secret_id: str) -> Record:
        vault = self.load()
        index = vault.index_of(secret_id)
        if index is None:
            raise NotFound(secret_id)
        return vault.secrets[index]

    # ─── Mutations ───────────────────────────────────────────────────────

    def create(self, fields: Mapping[str, Any]) -> Record:
        """Validate and append a new record with a fresh id and timestamps."""
        errors = validate_secret(fields)
        if errors:
            raise ValidationFailed(errors)

        with self._transaction():
            vault = self.load()
            now = next_timestamp(self._clock())
            record = Record(
                id=self._new_id(vault),
                type=fields["type"],
                name=fields["name"],
                details=copy.deepcopy(fields["details"]),
                createdAt=now,
                updatedAt=now,
            )
            vault.secrets.append(record)
            self.save(vault)

        logger.debug("Created secret %s (%s)", record.id, record.type.value)
        return record

    def update(self, secret_id: str, fields: Mapping[str, Any]) -> Record:
        """Merge the present fields over an existing record and refresh ``updatedAt``.

        ``id`` and ``createdAt`` are never taken from ``fields``; keys other
        than type/name/details are ignored.

        Raises:
            NotFound: no record has ``secret_id`` (checked before validation).
            ValidationFailed: a present field is invalid.
        """
        with self._transaction():
            vault = self.load()
            index = vault.index_of(secret_id)
            if index is None:
                raise NotFound(secret_id)

            errors = validate_secret(fields, is_update=True)
            if errors:
                raise ValidationFailed(errors)

            existing = vault.secrets[index]
            merged = existing.to_dict()
            for key in MUTABLE_FIELDS:
                if key in fields:
                    merged[key] = copy.deepcopy(fields[key])
            merged["updatedAt"] = next_timestamp(self._clock(), existing.updatedAt)

            updated = Record.model_validate(merged)
            vault.secrets[index] = updated
            self.save(vault)

        logger.debug("Updated secret %s", secret_id)
        return updated

    def delete(self, secret_id: str) -> Record:
        """Remove a record and return it."""
        with self._transaction():
            vault = self.load()
            index = vault.index_of(secret_id)
            if index is None:
                raise NotFound(secret_id)
            removed = vault.secrets.pop(index)
            self.save(vault)

        logger.debug("Deleted secret %s", secret_id)
        return removed


class JsonFileVaultStore(BaseVaultStore):
    """Store backed by a single JSON document of the form ``{"secrets": [...]}``.

    A missing file is created empty. A document that is not JSON, or lacks the
    ``{"secrets": [...]}`` shape, is treated as corruption: the file is reset
    to an empty vault and a warning is logged. Individual invalid records are
    skipped on read and the file is left as is until the next mutation.
    OS-level read/write failures raise ``StorageUnavailable``.
    """

    def __init__(self, path: Path | str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.path = Path(path)

    def load(self) -> Vault:
        with self._transaction():
            try:
                raw = self.path.read_bytes()
            except FileNotFoundError:
                logger.info("Vault file %s not found, initializing empty vault", self.path)
                return self._reset()
            except OSError as e:
                logger.error("Failed to read vault file %s: %s", self.path, e)
                raise StorageUnavailable(self.path, "read", e) from e

            try:
                return parse_vault(raw, self.path)
            except StorageCorrupted as e:
                logger.warning("%s. Resetting to empty state.", e)
                return self._reset()

    def save(self, vault: Vault) -> None:
        content = dump_vault(vault)
        with self._transaction():
            try:
                _atomic_write(self.path, content)
            except OSError as e:
                logger.error("Failed to write vault file %s: %s", self.path, e)
                raise StorageUnavailable(self.path, "write", e) from e

    def _reset(self) -> Vault:
        empty = Vault()
        self.save(empty)
        return empty


def _atomic_write(path: Path, content: str) -> None:
    """Write ``content`` to a temp file beside ``path`` and rename it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}-",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except Exception:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


class InMemoryVaultStore(BaseVaultStore):
    """Store that keeps the serialized vault in memory.

    The vault is held as its JSON document so callers never share mutable
    state with the store, exactly as with the file-backed store.
    """

    def __init__(self, initial: Vault | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._document = dump_vault(initial or Vault())
        self.save_count = 0

    def load(self) -> Vault:
        with self._transaction():
            return parse_vault(self._document, "<memory>")

    def save(self, vault: Vault) -> None:
        with self._transaction():
            self._document = dump_vault(vault)
            self.save_count += 1
