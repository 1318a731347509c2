"""File-backed storage for published snapshots."""

from __future__ import annotations

import asyncio
import json
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from tocideator.exceptions import (
    CorruptSnapshotError,
    InvalidShareIdError,
    PayloadError,
    SnapshotNotFoundError,
)
from tocideator.file_utils import read_text_async, write_text_atomic
from tocideator.utils.logging_config import get_logger
from toc_server.server_config import MAX_PAYLOAD_BYTES, SHARE_ID_PATTERN

logger = get_logger(__name__)


def validate_share_payload(raw: bytes, *, max_bytes: int = MAX_PAYLOAD_BYTES) -> dict[str, Any] | list[Any]:
    """Check a raw request body and return the decoded snapshot.

    Raises:
        PayloadError: Empty body (400), body over ``max_bytes`` (413), body
            that is not a JSON object or array (400), or an object without a
            ``tree`` array (400).
    """
    if not raw:
        raise PayloadError("Empty body", status_code=400)
    if len(raw) > max_bytes:
        raise PayloadError("Payload too large", status_code=413)
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PayloadError("Invalid JSON", status_code=400) from exc
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        raise PayloadError("Invalid JSON", status_code=400)
    if not isinstance(data.get("tree"), list):
        raise PayloadError("Missing tree", status_code=400)
    return data


def new_share_id() -> str:
    """128 random bits as 32 lowercase hex characters."""
    return secrets.token_hex(16)


class SnapshotStore:
    """Stores each snapshot as ``<share id>.json`` under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, share_id: str) -> Path:
        if not SHARE_ID_PATTERN.match(share_id or ""):
            raise InvalidShareIdError("Invalid id")
        return self.root / f"{share_id}.json"

    def save(self, payload: dict[str, Any] | list[Any]) -> str:
        """Persist ``payload`` with a server-side ``savedAt`` stamp; return its id."""
        document = dict(payload) if isinstance(payload, dict) else {"tree": payload}
        document["savedAt"] = datetime.now(timezone.utc).isoformat(timespec="seconds")

        share_id = new_share_id()
        while self.path_for(share_id).exists():
            share_id = new_share_id()

        write_text_atomic(
            self.path_for(share_id),
            json.dumps(document, ensure_ascii=False, separators=(",", ":")),
        )
        logger.info("Snapshot stored", extra={"share_id": share_id})
        return share_id

    async def save_async(self, payload: dict[str, Any] | list[Any]) -> str:
        return await asyncio.to_thread(self.save, payload)

    async def load_async(self, share_id: str) -> dict[str, Any]:
        """Load a stored snapshot document.

        Raises:
            InvalidShareIdError: ``share_id`` is not 32 lowercase hex characters.
            SnapshotNotFoundError: Nothing is stored under ``share_id``.
            CorruptSnapshotError: The stored file is not a JSON object or array.
        """
        path = self.path_for(share_id)
        if not path.is_file():
            raise SnapshotNotFoundError("Not found")
        try:
            data = json.loads(await read_text_async(path))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Stored snapshot is corrupt", extra={"share_id": share_id, "error": str(exc)})
            raise CorruptSnapshotError("Corrupted data") from exc
        if isinstance(data, list):
            return {"tree": data}
        if not isinstance(data, dict):
            raise CorruptSnapshotError("Corrupted data")
        return data
