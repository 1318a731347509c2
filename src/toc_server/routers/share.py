"""Publish and read endpoints for shared snapshots."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse

from tocideator.exceptions import (
    InvalidShareIdError,
    PayloadError,
    SnapshotNotFoundError,
    StoreError,
)
from tocideator.schemas import ShareErrorResponse, ShareResponse
from tocideator.utils.logging_config import get_logger
from toc_server.rendering import render_share_page
from toc_server.server_config import MAX_PAYLOAD_BYTES, SHARE_URL_PREFIX
from toc_server.store import SnapshotStore, validate_share_payload

logger = get_logger(__name__)

router = APIRouter()

COMMON_SHARE_RESPONSES: dict[int | str, dict] = {
    status.HTTP_400_BAD_REQUEST: {"model": ShareErrorResponse, "description": "Rejected payload or id"},
    status.HTTP_404_NOT_FOUND: {"model": ShareErrorResponse, "description": "Snapshot not found"},
    413: {"model": ShareErrorResponse, "description": "Payload too large"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ShareErrorResponse, "description": "Storage failure"},
}


def _store(request: Request) -> SnapshotStore:
    return request.app.state.store


async def _read_body(request: Request, limit: int) -> bytes:
    """Read the request body, stopping as soon as it exceeds ``limit`` bytes."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise PayloadError("Payload too large", status_code=413)
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadError("Payload too large", status_code=413)
    return bytes(body)


@router.post("/api/share", response_model=ShareResponse, responses=COMMON_SHARE_RESPONSES)
async def create_share(request: Request) -> ShareResponse:
    """Store a snapshot and return its share id and read-only URL.

    The body is the exported snapshot document (or a bare node array).
    """
    try:
        raw = await _read_body(request, MAX_PAYLOAD_BYTES)
        payload = validate_share_payload(raw, max_bytes=MAX_PAYLOAD_BYTES)
    except PayloadError as exc:
        logger.info("Share payload rejected", extra={"status": exc.status_code, "reason": str(exc)})
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc

    try:
        share_id = await _store(request).save_async(payload)
    except OSError as exc:
        logger.error("Share write failed", extra={"error": str(exc)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Write failed") from exc

    return ShareResponse(ok=True, id=share_id, url=f"{SHARE_URL_PREFIX}{share_id}")


async def _load_document(request: Request, share_id: str) -> dict:
    try:
        return await _store(request).load_async(share_id)
    except InvalidShareIdError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SnapshotNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get("/api/share/{share_id}", responses=COMMON_SHARE_RESPONSES)
async def get_share_document(request: Request, share_id: str) -> JSONResponse:
    """Return the stored snapshot document as JSON."""
    return JSONResponse(await _load_document(request, share_id))


@router.get("/share/{share_id}", response_class=HTMLResponse)
async def view_share(request: Request, share_id: str) -> HTMLResponse:
    """Render the read-only outline page for ``share_id``."""
    document = await _load_document(request, share_id)
    return HTMLResponse(render_share_page(share_id, document))
