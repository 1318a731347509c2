"""Hierarchical numbering for the always-expanded outline preview."""

from __future__ import annotations

from dataclasses import dataclass

from tocideator.mutations import display_title
from tocideator.schemas import MAX_LEVEL, Forest, SectionNode


@dataclass(frozen=True)
class PreviewRow:
    """One preview line.

    Attributes:
        level: Node level (0 for the title row).
        label: Dotted number such as ``"2.1"``; empty for the title row.
        title: Displayed title of the node.
        indent: Indentation in units (``level - 1`` for sections).
    """

    level: int
    label: str
    title: str
    indent: int


def number_outline(forest: Forest) -> list[PreviewRow]:
    """Number every section in document order, ignoring collapsed state."""
    rows: list[PreviewRow] = []
    counters = [0] * MAX_LEVEL

    def _walk(nodes: list) -> None:
        for node in nodes:
            if not isinstance(node, SectionNode):
                rows.append(PreviewRow(level=0, label="", title=display_title(node), indent=0))
                continue
            depth = node.level
            counters[depth - 1] += 1
            for deeper in range(depth, MAX_LEVEL):
                counters[deeper] = 0
            label = ".".join(str(count) for count in counters[:depth])
            rows.append(PreviewRow(level=depth, label=label, title=display_title(node), indent=depth - 1))
            _walk(node.children)

    _walk(forest)
    return rows


def render_preview_text(
    rows: list[PreviewRow],
    *,
    with_numbers: bool = True,
    indent_width: int = 2,
) -> str:
    """Render preview rows as indented plain text."""
    lines: list[str] = []
    for row in rows:
        prefix = " " * (row.indent * indent_width)
        if with_numbers and row.label:
            lines.append(f"{prefix}{row.label} {row.title}")
        else:
            lines.append(f"{prefix}{row.title}")
    return "\n".join(lines)
