"""Outline node models.

The document title and the numbered sections share one record shape but are
separate types: a ``TitleNode`` has no children list at all, so the rules
"the title never gains children" and "the title is never re-parented" do not
depend on checking ``level == 0`` at every call site.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field, model_validator

PLACEHOLDER_TITLE = "Untitled"
MAX_LEVEL = 3


class OutlineNode(BaseModel):
    """Fields shared by the title node and section nodes.

    Attributes:
        id: Opaque identifier, unique across the forest.
        level: 0 for the title node, 1..3 for sections.
        options: Candidate titles in picker order (never empty).
        selected: Index of the displayed candidate.
        collapsed: Editor-only fold state; ignored by every projection.
    """

    id: str = Field(..., min_length=1)
    level: int
    options: list[str] = Field(..., min_length=1)
    selected: int = Field(default=0, ge=0)
    collapsed: bool = False

    @model_validator(mode="after")
    def _check_selected(self) -> OutlineNode:
        if self.selected >= len(self.options):
            raise ValueError(
                f"selected index {self.selected} out of range for {len(self.options)} options"
            )
        return self

    @property
    def is_title(self) -> bool:
        return False

    @property
    def title(self) -> str:
        """Displayed title: the selected option trimmed, or the placeholder."""
        if 0 <= self.selected < len(self.options):
            text = self.options[self.selected].strip()
            if text:
                return text
        return PLACEHOLDER_TITLE


class TitleNode(OutlineNode):
    """The singleton document title (level 0)."""

    level: Literal[0] = 0
    # Always empty; kept so the serialized shape matches section nodes.
    children: tuple[()] = ()

    @property
    def is_title(self) -> bool:
        return True


class SectionNode(OutlineNode):
    """A numbered section at depth 1..3."""

    level: int = Field(..., ge=1, le=MAX_LEVEL)
    children: list[SectionNode] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_children(self) -> SectionNode:
        if self.level >= MAX_LEVEL and self.children:
            raise ValueError(f"level {self.level} sections cannot have children")
        for child in self.children:
            if child.level != self.level + 1:
                raise ValueError(
                    f"child {child.id!r} has level {child.level}, expected {self.level + 1}"
                )
        return self


AnyNode = Union[TitleNode, SectionNode]
Forest = list[AnyNode]
