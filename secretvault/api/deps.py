"""API dependency injection — shared FastAPI dependencies."""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from secretvault.config import Config
from secretvault.vault.store import BaseVaultStore

# Deepest array/object nesting accepted in a request body.
MAX_JSON_DEPTH = 64


class PayloadError(Exception):
    """The request body could not be turned into candidate fields."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def get_store(request: Request) -> BaseVaultStore:
    """The vault store attached to the app by ``create_app``."""
    return request.app.state.store


def get_app_config(request: Request) -> Config:
    return request.app.state.config


def _nesting_depth(value: Any) -> int:
    depth = 0
    pending = [(value, 1)]
    while pending:
        node, level = pending.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        depth = max(depth, level)
        pending.extend((child, level + 1) for child in children)
    return depth


async def read_payload(request: Request) -> Any:
    """Decode the JSON request body, enforcing the configured size limit.

    An empty body decodes to ``{}``.

    Raises:
        PayloadError: 413 when the body is too large, 400 when it is not JSON
            or nests deeper than ``MAX_JSON_DEPTH``.
    """
    limit = get_app_config(request).max_body_bytes

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadError(413, "Payload too large")

    body = await request.body()
    if len(body) > limit:
        raise PayloadError(413, "Payload too large")
    if not body.strip():
        return {}

    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise PayloadError(400, "Invalid JSON payload") from e

    if _nesting_depth(payload) > MAX_JSON_DEPTH:
        raise PayloadError(400, "Invalid JSON payload")
    return payload
