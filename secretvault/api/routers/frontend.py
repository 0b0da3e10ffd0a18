"""Static UI routes.

Serves the browser UI from the configured frontend directory. Unknown paths
fall back to ``index.html`` so client-side navigation works; paths that
resolve outside the directory are refused.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, PlainTextResponse

from secretvault.api.deps import get_app_config
from secretvault.config import Config

router = APIRouter(tags=["frontend"])


@router.get("/{path:path}", include_in_schema=False)
async def serve_frontend(path: str, cfg: Config = Depends(get_app_config)):
    root = cfg.frontend_dir.resolve()
    index = root / "index.html"

    target = (root / path).resolve() if path else index
    if not target.is_relative_to(root):
        return PlainTextResponse("Forbidden", status_code=403)

    if not target.is_file():
        target = index
    if not target.is_file():
        return PlainTextResponse("Not found", status_code=404)
    return FileResponse(target)
