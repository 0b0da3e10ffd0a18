"""Secret CRUD routes.

Store calls block on file I/O, so they run in worker threads via
``asyncio.to_thread``; the store lock serializes the writers.
"""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from secretvault.api.deps import get_store, read_payload
from secretvault.vault.store import BaseVaultStore

router = APIRouter(prefix="/api/secrets", tags=["secrets"])

_ANY_METHOD = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


@router.get("")
async def api_list_secrets(store: BaseVaultStore = Depends(get_store)):
    records = await asyncio.to_thread(store.list)
    return [record.to_dict() for record in records]


@router.post("", status_code=201)
async def api_create_secret(
    payload: Any = Depends(read_payload),
    store: BaseVaultStore = Depends(get_store),
):
    record = await asyncio.to_thread(store.create, payload)
    return JSONResponse(record.to_dict(), status_code=201)


@router.get("/{secret_id}")
async def api_get_secret(
    secret_id: str,
    store: BaseVaultStore = Depends(get_store),
):
    record = await asyncio.to_thread(store.get, secret_id)
    return record.to_dict()


@router.put("/{secret_id}")
async def api_update_secret(
    secret_id: str,
    payload: Any = Depends(read_payload),
    store: BaseVaultStore = Depends(get_store),
):
    record = await asyncio.to_thread(store.update, secret_id, payload)
    return record.to_dict()


@router.delete("/{secret_id}")
async def api_delete_secret(
    secret_id: str,
    store: BaseVaultStore = Depends(get_store),
):
    record = await asyncio.to_thread(store.delete, secret_id)
    return record.to_dict()


# Any other method or path under /api/secrets is a plain 404.
@router.api_route("", methods=_ANY_METHOD, include_in_schema=False)
@router.api_route("/{rest:path}", methods=_ANY_METHOD, include_in_schema=False)
async def api_not_found(rest: str = ""):
    return JSONResponse({"message": "Not found"}, status_code=404)
