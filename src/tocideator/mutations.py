"""In-place structural edits on an outline forest.

Every operation re-resolves its target by id. A stale id (the node was
removed between an event firing and its handler running) makes the call a
no-op that returns ``False``/``None`` instead of raising.
"""

from __future__ import annotations

from enum import Enum

from tocideator.schemas import MAX_LEVEL, PLACEHOLDER_TITLE, AnyNode, Forest, SectionNode
from tocideator.tree import NodeContext, find_context, make_node
from tocideator.utils.logging_config import get_logger

logger = get_logger(__name__)


class MoveMode(str, Enum):
    """How a dragged node is placed relative to its drop target."""

    BEFORE = "before"
    AFTER = "after"
    INTO = "into"
    ROOT_END = "root_end"


def display_title(node: AnyNode) -> str:
    """Selected option trimmed, or the placeholder when it is blank."""
    return node.title


def _resolve(forest: Forest, node_id: str, operation: str) -> NodeContext | None:
    ctx = find_context(forest, node_id)
    if ctx is None:
        logger.debug("Ignoring %s for unknown node", operation, extra={"node_id": node_id})
    return ctx


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def add_sibling(forest: Forest, node_id: str) -> str | None:
    """Insert a default node of the same level right after ``node_id``."""
    ctx = _resolve(forest, node_id, "add_sibling")
    if ctx is None or ctx.node.is_title:
        return None
    node = make_node(ctx.node.level)
    ctx.siblings.insert(ctx.index + 1, node)
    return node.id


def add_child(forest: Forest, node_id: str) -> str | None:
    """Append a default child and expand the parent; sections below level 3 only."""
    ctx = _resolve(forest, node_id, "add_child")
    if ctx is None or not isinstance(ctx.node, SectionNode) or ctx.node.level >= MAX_LEVEL:
        return None
    child = make_node(ctx.node.level + 1)
    ctx.node.children.append(child)
    ctx.node.collapsed = False
    return child.id


def add_root(forest: Forest) -> str:
    """Append a default chapter to the end of the top-level list."""
    node = make_node(1)
    forest.append(node)
    return node.id


def delete_node(forest: Forest, node_id: str) -> bool:
    """Remove a node with its subtree. The title node cannot be deleted."""
    ctx = _resolve(forest, node_id, "delete")
    if ctx is None or ctx.node.is_title:
        return False
    del ctx.siblings[ctx.index]
    if not forest:
        forest.append(make_node(1))
    return True


def set_selected(forest: Forest, node_id: str, index: int) -> bool:
    ctx = _resolve(forest, node_id, "set_selected")
    if ctx is None:
        return False
    ctx.node.selected = _clamp(int(index), 0, len(ctx.node.options) - 1)
    return True


def add_option(forest: Forest, node_id: str, text: str) -> bool:
    """Append a candidate title; blank text is rejected."""
    value = (text or "").strip()
    if not value:
        return False
    ctx = _resolve(forest, node_id, "add_option")
    if ctx is None:
        return False
    ctx.node.options.append(value)
    return True


def edit_option(forest: Forest, node_id: str, index: int, text: str) -> bool:
    ctx = _resolve(forest, node_id, "edit_option")
    if ctx is None or not 0 <= index < len(ctx.node.options):
        return False
    ctx.node.options[index] = text
    return True


def remove_option(forest: Forest, node_id: str, index: int) -> bool:
    """Drop a candidate title. The last remaining candidate is kept."""
    ctx = _resolve(forest, node_id, "remove_option")
    if ctx is None:
        return False
    node = ctx.node
    if len(node.options) <= 1 or not 0 <= index < len(node.options):
        return False
    del node.options[index]
    if not node.options:
        node.options = [PLACEHOLDER_TITLE]
    node.selected = _clamp(node.selected, 0, len(node.options) - 1)
    return True


def toggle_collapsed(forest: Forest, node_id: str) -> bool:
    ctx = _resolve(forest, node_id, "toggle_collapsed")
    if ctx is None or ctx.node.is_title:
        return False
    ctx.node.collapsed = not ctx.node.collapsed
    return True


def move_node(forest: Forest, source_id: str, target_id: str | None, mode: MoveMode) -> bool:
    """Commit a drag-and-drop move after re-checking the placement rules.

    ``before``/``after`` reorder within one sibling list and need the same
    parent and level. ``into`` re-parents the source as the last child of a
    target one level up. ``root_end`` moves a chapter to the end of the
    top-level list and takes no target.
    """
    source = _resolve(forest, source_id, "move")
    if source is None or source.node.is_title:
        return False

    if mode is MoveMode.ROOT_END:
        if source.node.level != 1:
            return False
        item = source.siblings.pop(source.index)
        forest.append(item)
        return True

    if target_id is None or target_id == source_id:
        return False
    target = _resolve(forest, target_id, "move")
    if target is None or target.node.is_title:
        return False

    if mode in (MoveMode.BEFORE, MoveMode.AFTER):
        if target.parent_id != source.parent_id or target.node.level != source.node.level:
            return False
        siblings = source.siblings
        from_index = source.index
        to_index = target.index + (1 if mode is MoveMode.AFTER else 0)
        # Removing the source first shifts everything after it one slot left.
        if from_index < to_index:
            to_index -= 1
        item = siblings.pop(from_index)
        siblings.insert(to_index, item)
        return True

    if mode is MoveMode.INTO:
        if target.node.level != source.node.level - 1:
            return False
        item = source.siblings.pop(source.index)
        target.node.children.append(item)
        target.node.collapsed = False
        return True

    return False
