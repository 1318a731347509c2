"""Export and import of outline snapshots (the JSON document format)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from tocideator.exceptions import ParseError
from tocideator.normalizer import normalize_imported_tree
from tocideator.schemas import Forest, SnapshotDocument


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_export_payload(forest: Forest, *, now: datetime | None = None) -> dict[str, Any]:
    """Serialize the forest into a detached plain-dict snapshot.

    The result shares no objects with ``forest``; later edits to the outline
    cannot change a payload that is already on its way to disk or the network.
    """
    document = SnapshotDocument(exported_at=utc_timestamp(now), tree=list(forest))
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def export_json(forest: Forest, *, now: datetime | None = None) -> str:
    return json.dumps(build_export_payload(forest, now=now), ensure_ascii=False, indent=2)


def export_filename(now: datetime | None = None) -> str:
    """Download name for an exported snapshot, safe on every filesystem."""
    return f"toc-ideator-{utc_timestamp(now).replace(':', '-')}.json"


def parse_snapshot_text(text: str) -> Forest:
    """Decode snapshot JSON text and normalize it into a forest.

    Raises:
        ParseError: The text is blank or not valid JSON.
        ValidationError: The JSON is neither an array nor a ``{"tree": [...]}`` object.
    """
    if not (text or "").strip():
        raise ParseError("snapshot text is empty")
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"snapshot is not valid JSON: {exc.msg} (line {exc.lineno})") from exc
    return normalize_imported_tree(value)
