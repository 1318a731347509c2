"""FastAPI application for the share server."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from tocideator.config import TOC_IDEATOR_STORE_PATH
from tocideator.utils.logging_config import configure_logging, get_logger
from toc_server.routers import share
from toc_server.store import SnapshotStore

logger = get_logger(__name__)


def create_app(store_root: Path | None = None) -> FastAPI:
    """Create the share server app storing snapshots under ``store_root``."""
    configure_logging()

    app = FastAPI(title="toc-ideator share server", version="0.1.0")
    app.state.store = SnapshotStore(store_root or TOC_IDEATOR_STORE_PATH)
    app.include_router(share.router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        # API callers get the {ok, msg} envelope; page visitors get plain text.
        if request.url.path.startswith("/api/"):
            return JSONResponse(
                {"ok": False, "msg": str(exc.detail)},
                status_code=exc.status_code,
                headers=getattr(exc, "headers", None),
            )
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info("Share server ready", extra={"store": str(app.state.store.root)})
    return app


app = create_app()
