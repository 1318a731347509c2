"""Shared schemas for tocideator."""

from tocideator.schemas.nodes import (
    MAX_LEVEL,
    PLACEHOLDER_TITLE,
    AnyNode,
    Forest,
    OutlineNode,
    SectionNode,
    TitleNode,
)
from tocideator.schemas.snapshot import (
    SNAPSHOT_SCHEMA,
    SNAPSHOT_VERSION,
    ShareErrorResponse,
    ShareResponse,
    SnapshotDocument,
)

__all__ = [
    "MAX_LEVEL",
    "PLACEHOLDER_TITLE",
    "SNAPSHOT_SCHEMA",
    "SNAPSHOT_VERSION",
    "AnyNode",
    "Forest",
    "OutlineNode",
    "SectionNode",
    "ShareErrorResponse",
    "ShareResponse",
    "SnapshotDocument",
    "TitleNode",
]
