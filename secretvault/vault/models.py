"""
Vault data models.

A ``Record`` is one stored secret; a ``Vault`` is the ordered collection that
is persisted as ``{"secrets": [...]}``. Field names follow the wire format
(camelCase timestamps) so records serialize without aliasing.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SecretType(str, Enum):
    CREDENTIAL = "credential"
    SSH_KEY = "sshKey"
    CREDIT_CARD = "creditCard"
    MISC = "misc"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


# Fields a caller may set on create/update. Everything else is owned by the store.
MUTABLE_FIELDS: tuple[str, ...] = ("type", "name", "details")


class Record(BaseModel):
    """A stored secret entry."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: SecretType
    name: str
    details: dict[str, Any]
    createdAt: str
    updatedAt: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON response/persistence shape."""
        return self.model_dump(mode="json")


class Vault(BaseModel):
    """The persisted aggregate: records in insertion order, unique by id."""

    secrets: list[Record] = Field(default_factory=list)

    @model_validator(mode="after")
    def _ids_unique(self) -> Vault:
        seen: set[str] = set()
        for record in self.secrets:
            if record.id in seen:
                raise ValueError(f"duplicate secret id {record.id!r}")
            seen.add(record.id)
        return self

    def index_of(self, secret_id: str) -> int | None:
        for i, record in enumerate(self.secrets):
            if record.id == secret_id:
                return i
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"secrets": [record.to_dict() for record in self.secrets]}


# ─── Timestamps ──────────────────────────────────────────────────────────


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision, e.g. 2026-10-19T08:30:00.000Z."""
    moment = moment.astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp. Returns None if unparseable."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def next_timestamp(now: datetime, previous: str | None = None) -> str:
    """Format ``now``, bumped past ``previous`` so successive stamps strictly increase."""
    now = now.astimezone(UTC)
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)
    if previous is not None:
        prev = parse_timestamp(previous)
        if prev is not None and now <= prev:
            now = prev + timedelta(milliseconds=1)
    return format_timestamp(now)
