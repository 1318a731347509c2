"""Local autosave of the working outline.

Saving is best effort: a full disk or a read-only directory is logged and
reported through the return value, while the in-memory outline stays
authoritative for the session.
"""

from __future__ import annotations

import json
from pathlib import Path

from tocideator.config import TOC_IDEATOR_SAVE_PATH
from tocideator.exceptions import ValidationError
from tocideator.file_utils import write_text_atomic, write_text_atomic_async
from tocideator.normalizer import adopt_title, normalize_imported_tree
from tocideator.schemas import Forest
from tocideator.snapshot import build_export_payload
from tocideator.utils.logging_config import get_logger

logger = get_logger(__name__)


class LocalStore:
    """Key-value style save slot backed by one JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or TOC_IDEATOR_SAVE_PATH

    def _serialize(self, forest: Forest) -> str:
        return json.dumps(build_export_payload(forest), ensure_ascii=False)

    def save(self, forest: Forest) -> bool:
        """Write the outline; returns False (after logging) when the write fails."""
        content = self._serialize(forest)
        try:
            write_text_atomic(self.path, content)
        except OSError as exc:
            logger.warning("Autosave failed", extra={"path": str(self.path), "error": str(exc)})
            return False
        return True

    async def save_async(self, forest: Forest) -> bool:
        """Asynchronous :meth:`save`; the outline is serialized before any await."""
        content = self._serialize(forest)
        try:
            await write_text_atomic_async(self.path, content)
        except OSError as exc:
            logger.warning("Autosave failed", extra={"path": str(self.path), "error": str(exc)})
            return False
        return True

    def load(self) -> Forest | None:
        """Load the saved outline, or None when nothing usable is stored.

        Saves from the older title-less format gain a title node on load.
        """
        if not self.path.is_file():
            return None
        try:
            value = json.loads(self.path.read_text(encoding="utf-8"))
            forest = normalize_imported_tree(value)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable autosave", extra={"path": str(self.path), "error": str(exc)})
            return None
        if adopt_title(forest):
            logger.info("Migrated autosave to the titled outline format", extra={"path": str(self.path)})
        return forest

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
