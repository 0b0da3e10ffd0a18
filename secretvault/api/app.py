"""
SecretVault API — FastAPI app serving the secret CRUD routes and the browser UI.

Start:
  secretvault serve
  # or
  uvicorn secretvault.api.app:create_app --factory --port 3000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from secretvault import __version__
from secretvault.api.deps import PayloadError
from secretvault.api.routers import frontend, health, secrets
from secretvault.config import Config, get_config
from secretvault.vault.errors import NotFound, StorageUnavailable, ValidationFailed
from secretvault.vault.store import BaseVaultStore, JsonFileVaultStore

logger = logging.getLogger(__name__)

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create (or repair) the vault file before the first request arrives.
    app.state.store.load()
    logger.info("Vault server running on %s", app.state.config.base_url)
    yield


# ─── Error Handlers ──────────────────────────────────────────────────────


async def _validation_failed(request: Request, exc: ValidationFailed) -> JSONResponse:
    return JSONResponse({"message": "Validation failed", "errors": exc.errors}, status_code=400)


async def _not_found(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse({"message": "Not found"}, status_code=404)


async def _storage_unavailable(request: Request, exc: StorageUnavailable) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse({"message": "Storage unavailable"}, status_code=500)


async def _payload_error(request: Request, exc: PayloadError) -> JSONResponse:
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


async def _options(path: str) -> Response:
    # CORSMiddleware answers real preflights; anything else still gets a 200.
    return Response(status_code=200, headers=_CORS_HEADERS)


# ─── App Factory ─────────────────────────────────────────────────────────


def create_app(store: BaseVaultStore | None = None, config: Config | None = None) -> FastAPI:
    """Build the API app.

    Args:
        store: Vault store to serve; defaults to a JSON file store at ``config.data_path``.
        config: Defaults to the environment-derived singleton.
    """
    cfg = config or get_config()

    app = FastAPI(title="SecretVault", version=__version__, lifespan=lifespan)
    app.state.config = cfg
    app.state.store = store or JsonFileVaultStore(
        cfg.data_path, serialize_writes=cfg.serialize_writes
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=_CORS_HEADERS["Access-Control-Allow-Methods"].split(","),
        allow_headers=[_CORS_HEADERS["Access-Control-Allow-Headers"]],
    )

    app.add_exception_handler(ValidationFailed, _validation_failed)
    app.add_exception_handler(NotFound, _not_found)
    app.add_exception_handler(StorageUnavailable, _storage_unavailable)
    app.add_exception_handler(PayloadError, _payload_error)

    app.add_api_route("/{path:path}", _options, methods=["OPTIONS"], include_in_schema=False)
    app.include_router(health.router)
    app.include_router(secrets.router)
    # Catch-all; must stay last.
    app.include_router(frontend.router)
    return app
