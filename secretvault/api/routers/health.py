"""Health route."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from secretvault.api.deps import get_store
from secretvault.vault.errors import StorageUnavailable
from secretvault.vault.store import BaseVaultStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(store: BaseVaultStore = Depends(get_store)):
    """Report whether the vault file can be read."""
    try:
        count = len(await asyncio.to_thread(store.list))
    except StorageUnavailable as e:
        return JSONResponse({"status": "degraded", "error": str(e)}, status_code=503)
    return {"status": "ok", "secrets": count}
