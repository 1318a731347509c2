"""tocideator: draft table-of-contents outlines with candidate titles."""

from tocideator.dragdrop import DragDropController, DragPhase, DropIndicator, resolve_move_mode
from tocideator.exceptions import (
    CorruptSnapshotError,
    DragError,
    InvalidShareIdError,
    ParseError,
    PayloadError,
    PublishError,
    SnapshotNotFoundError,
    StoreError,
    TocIdeatorError,
    ValidationError,
)
from tocideator.markdown import to_markdown
from tocideator.mutations import MoveMode
from tocideator.normalizer import adopt_title, normalize_imported_tree
from tocideator.numbering import PreviewRow, number_outline
from tocideator.schemas import Forest, SectionNode, SnapshotDocument, TitleNode
from tocideator.session import OutlineSession
from tocideator.snapshot import build_export_payload, export_json, parse_snapshot_text

__all__ = [
    "CorruptSnapshotError",
    "DragDropController",
    "DragError",
    "DragPhase",
    "DropIndicator",
    "Forest",
    "InvalidShareIdError",
    "MoveMode",
    "OutlineSession",
    "ParseError",
    "PayloadError",
    "PreviewRow",
    "PublishError",
    "SectionNode",
    "SnapshotDocument",
    "SnapshotNotFoundError",
    "StoreError",
    "TitleNode",
    "TocIdeatorError",
    "ValidationError",
    "adopt_title",
    "build_export_payload",
    "export_json",
    "normalize_imported_tree",
    "number_outline",
    "parse_snapshot_text",
    "resolve_move_mode",
    "to_markdown",
]
