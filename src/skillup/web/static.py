"""Serving the built single-page client.

In production the client bundle (``dist/`` by default) is served from
``/``. Paths that don't match a file fall back to ``index.html`` so the
client router can handle them, except API paths, which keep their 404.
"""

from pathlib import Path

import structlog
from fastapi import FastAPI, HTTPException, status
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

logger = structlog.get_logger(__name__)

API_PREFIX = "api"


def mount_client(app: FastAPI, static_dir: Path) -> bool:
    """Register static file serving with an index.html fallback.

    Must be called after all API routers are included.

    Args:
        app: Application to mount on
        static_dir: Directory holding the built client (index.html, assets/)

    Returns:
        True if mounted, False if the directory or index.html is missing
    """
    static_dir = Path(static_dir)
    index_file = static_dir / "index.html"

    if not index_file.is_file():
        logger.warning("static.missing", static_dir=str(static_dir.absolute()))
        return False

    assets_dir = static_dir / "assets"
    if assets_dir.is_dir():
        app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")

    root = static_dir.resolve()

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_client(full_path: str) -> FileResponse:
        if full_path == API_PREFIX or full_path.startswith(API_PREFIX + "/"):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        return FileResponse(root / "index.html")

    logger.info("static.mounted", static_dir=str(root))
    return True
