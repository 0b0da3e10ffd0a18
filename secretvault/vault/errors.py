"""Vault error types."""

from __future__ import annotations

from pathlib import Path


class VaultError(Exception):
    """Base class for all vault errors."""


class ValidationFailed(VaultError):
    """Candidate fields did not pass validation.

    ``errors`` holds every violation, in rule order.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Validation failed: " + "; ".join(self.errors))


class NotFound(VaultError):
    def __init__(self, secret_id: str) -> None:
        self.secret_id = secret_id
        super().__init__(f"secret not found: {secret_id!r}")


class StorageCorrupted(VaultError):
    """The backing file exists but does not hold a readable vault."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"vault file {self.path} is corrupted: {reason}")


class StorageUnavailable(VaultError):
    """Reading or writing the backing file failed at the OS level."""

    def __init__(self, path: Path | str, operation: str, cause: OSError) -> None:
        self.path = Path(path)
        self.operation = operation
        self.cause = cause
        super().__init__(f"could not {operation} vault file {self.path}: {cause}")
