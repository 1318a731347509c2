"""Serialize an outline forest into heading-per-line Markdown."""

from __future__ import annotations

from tocideator.mutations import display_title
from tocideator.schemas import Forest, SectionNode


def to_markdown(forest: Forest) -> str:
    """One heading per node; the title is ``#``, level N sections get N+1 markers.

    A forest without a title node simply starts at ``##``.
    """
    lines: list[str] = []

    def _walk(nodes: list) -> None:
        for node in nodes:
            lines.append(f"{'#' * (node.level + 1)} {display_title(node)}")
            if isinstance(node, SectionNode):
                _walk(node.children)

    _walk(forest)
    return "\n".join(lines)
