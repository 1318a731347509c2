"""Node lookup, traversal, factories and invariant checks for outline forests."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Iterator

from tocideator.schemas import MAX_LEVEL, AnyNode, Forest, SectionNode, TitleNode

DEFAULT_OPTION_BY_LEVEL = {
    0: "Untitled Document",
    1: "Chapter One",
    2: "Section One",
    3: "Subsection",
}


@dataclass
class NodeContext:
    """Where a node currently sits in the forest.

    Attributes:
        node: The node itself.
        parent: Containing section, or None for top-level nodes.
        siblings: The list that holds the node (the forest or ``parent.children``).
        index: Position of the node within ``siblings``.
    """

    node: AnyNode
    parent: SectionNode | None
    siblings: list
    index: int

    @property
    def parent_id(self) -> str | None:
        return self.parent.id if self.parent is not None else None


def new_node_id() -> str:
    return str(uuid.uuid4())


def make_node(level: int) -> AnyNode:
    """Create a default node for ``level`` with a fresh id."""
    if level == 0:
        return TitleNode(id=new_node_id(), options=[DEFAULT_OPTION_BY_LEVEL[0]])
    if not 1 <= level <= MAX_LEVEL:
        raise ValueError(f"level must be between 0 and {MAX_LEVEL}, got {level}")
    return SectionNode(id=new_node_id(), level=level, options=[DEFAULT_OPTION_BY_LEVEL[level]])


def default_forest() -> Forest:
    """A fresh outline: the document title followed by one chapter."""
    return [make_node(0), make_node(1)]


def find_context(forest: Forest, node_id: str) -> NodeContext | None:
    """Locate ``node_id`` by depth-first search; None when it is not in the forest."""
    return _search(forest, node_id, None)


def _search(nodes: list, node_id: str, parent: SectionNode | None) -> NodeContext | None:
    for index, node in enumerate(nodes):
        if node.id == node_id:
            return NodeContext(node=node, parent=parent, siblings=nodes, index=index)
        if isinstance(node, SectionNode) and node.children:
            found = _search(node.children, node_id, node)
            if found is not None:
                return found
    return None


def iter_nodes(forest: Forest) -> Iterator[AnyNode]:
    """Yield every node in pre-order (document order)."""
    for node in forest:
        yield node
        if isinstance(node, SectionNode):
            yield from iter_nodes(node.children)


def title_node(forest: Forest) -> TitleNode | None:
    """Return the title node when the forest has one."""
    if forest and isinstance(forest[0], TitleNode):
        return forest[0]
    return None


def count_sections(forest: Forest) -> int:
    """Count section nodes (the title node is not counted)."""
    return sum(1 for node in iter_nodes(forest) if isinstance(node, SectionNode))


def check_invariants(forest: Forest) -> list[str]:
    """Return a description of every broken forest invariant (empty when valid)."""
    problems: list[str] = []
    if not forest:
        problems.append("forest is empty")

    seen: set[str] = set()
    for node in iter_nodes(forest):
        if node.id in seen:
            problems.append(f"duplicate id {node.id!r}")
        seen.add(node.id)
        if not node.options:
            problems.append(f"node {node.id!r} has no options")
        elif not 0 <= node.selected < len(node.options):
            problems.append(f"node {node.id!r} selected index {node.selected} out of range")
        if node.level > MAX_LEVEL:
            problems.append(f"node {node.id!r} is deeper than level {MAX_LEVEL}")

    for position, node in enumerate(forest):
        if isinstance(node, TitleNode):
            if position != 0:
                problems.append(f"title node {node.id!r} is not first")
            if node.children:
                problems.append(f"title node {node.id!r} has children")
        elif node.level != 1:
            problems.append(f"top-level node {node.id!r} has level {node.level}")

    for node in iter_nodes(forest):
        if isinstance(node, SectionNode):
            for child in node.children:
                if not isinstance(child, SectionNode):
                    problems.append(f"title node {child.id!r} nested under {node.id!r}")
                elif child.level != node.level + 1:
                    problems.append(
                        f"child {child.id!r} of {node.id!r} has level {child.level}, expected {node.level + 1}"
                    )
    return problems
