"""Snapshot envelope and share-store response models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from tocideator.schemas.nodes import AnyNode

SNAPSHOT_SCHEMA = "toc-ideator"
SNAPSHOT_VERSION = 1


class SnapshotDocument(BaseModel):
    """Exported outline plus metadata.

    Attributes:
        schema_id: Always ``"toc-ideator"`` (serialized as ``schema``).
        version: Format version, currently 1.
        exported_at: ISO-8601 export timestamp (serialized as ``exportedAt``).
        tree: The forest, title node first when present.
        saved_at: Timestamp assigned by the share store (``savedAt``).
    """

    model_config = ConfigDict(populate_by_name=True)

    schema_id: Literal["toc-ideator"] = Field(default=SNAPSHOT_SCHEMA, alias="schema")
    version: Literal[1] = SNAPSHOT_VERSION
    exported_at: str = Field(..., alias="exportedAt")
    tree: list[AnyNode] = Field(default_factory=list)
    saved_at: str | None = Field(default=None, alias="savedAt")


class ShareResponse(BaseModel):
    """Body returned by the share store after a successful publish."""

    ok: bool
    id: str = Field(..., pattern=r"^[a-f0-9]{32}$")
    url: str = Field(..., min_length=1)


class ShareErrorResponse(BaseModel):
    """Body returned by the share store when a request is rejected."""

    ok: bool = False
    msg: str
