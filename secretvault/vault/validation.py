"""
Secret Validation — shape rules for create/update payloads.

Every write passes through validation before it reaches the store. Rules are
evaluated independently and all violations are reported together. The contents
of ``details`` are deliberately not checked against the secret type.

Usage:
    from secretvault.vault.validation import validate_secret

    errors = validate_secret({"type": "credential", "name": "Example", "details": {}})
    if errors:
        ...
"""

from __future__ import annotations

from typing import Any

from secretvault.vault.models import SecretType

ALLOWED_TYPES: frozenset[str] = frozenset(SecretType.values())

TYPE_ERROR = '"type" must be one of: ' + ", ".join(SecretType.values())
NAME_ERROR = '"name" is required'
DETAILS_ERROR = '"details" must be an object'
BODY_ERROR = "request body must be a JSON object"


def is_valid_type(value: Any) -> bool:
    return isinstance(value, str) and value in ALLOWED_TYPES


def is_valid_name(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def is_valid_details(value: Any) -> bool:
    return isinstance(value, dict)


def validate_secret(payload: Any, *, is_update: bool = False) -> list[str]:
    """Validate candidate fields for a create (default) or partial update.

    On update a field is only checked when its key is present; a key present
    with a null value still counts as present.

    Returns:
        Ordered list of human-readable errors; empty when the payload is acceptable.
    """
    if not isinstance(payload, dict):
        return [BODY_ERROR]

    errors: list[str] = []

    if (not is_update or "type" in payload) and not is_valid_type(payload.get("type")):
        errors.append(TYPE_ERROR)

    if (not is_update or "name" in payload) and not is_valid_name(payload.get("name")):
        errors.append(NAME_ERROR)

    if (not is_update or "details" in payload) and not is_valid_details(payload.get("details")):
        errors.append(DETAILS_ERROR)

    return errors
