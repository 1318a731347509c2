"""Repair arbitrary JSON into a structurally valid outline forest.

Only the top-level shape can fail. Everything below it is coerced: missing
or duplicate ids are regenerated, options become strings, out-of-range
selections are clamped and anything deeper than level 3 is dropped. Depth
comes from where a node sits in the input, never from its ``level`` field.
"""

from __future__ import annotations

import json
import math
from typing import Any

from tocideator.exceptions import ValidationError
from tocideator.schemas import MAX_LEVEL, PLACEHOLDER_TITLE, Forest, SectionNode, TitleNode
from tocideator.tree import DEFAULT_OPTION_BY_LEVEL, make_node, new_node_id, title_node
from tocideator.utils.logging_config import get_logger

logger = get_logger(__name__)

SHAPE_ERROR = "expected array or {tree:[...]}"


def extract_node_array(value: Any) -> list:
    """Return the raw node list of a bare array or a ``{"tree": [...]}`` envelope."""
    if isinstance(value, list):
        return value
    if isinstance(value, dict) and isinstance(value.get("tree"), list):
        return value["tree"]
    raise ValidationError(SHAPE_ERROR)


def normalize_imported_tree(value: Any) -> Forest:
    """Validate the top-level shape of ``value`` and repair everything inside it.

    The first top-level entry whose ``level`` is exactly ``0`` is read as the
    document title; every other entry is a section placed by position.

    Raises:
        ValidationError: ``value`` is neither a list nor an object with a
            ``tree`` list.
    """
    source = extract_node_array(value)
    seen: set[str] = set()

    def _unique_id(raw: Any) -> str:
        candidate = raw.strip() if isinstance(raw, str) else ""
        if not candidate:
            candidate = new_node_id()
        while candidate in seen:
            candidate = new_node_id()
        seen.add(candidate)
        return candidate

    def _section(raw: Any, level: int) -> SectionNode:
        data = raw if isinstance(raw, dict) else {}
        options = _coerce_options(data.get("options"))
        raw_children = data.get("children")
        children: list[SectionNode] = []
        if level < MAX_LEVEL and isinstance(raw_children, list):
            children = [_section(child, level + 1) for child in raw_children]
        return SectionNode(
            id=_unique_id(data.get("id")),
            level=level,
            options=options,
            selected=_coerce_selected(data.get("selected"), len(options)),
            collapsed=_truthy(data.get("collapsed")),
            children=children,
        )

    forest: Forest = []
    for position, raw in enumerate(source):
        if position == 0 and _is_title_entry(raw):
            options = _coerce_options(raw.get("options"))
            forest.append(
                TitleNode(
                    id=_unique_id(raw.get("id")),
                    options=options,
                    selected=_coerce_selected(raw.get("selected"), len(options)),
                )
            )
            continue
        forest.append(_section(raw, 1))

    if not forest:
        forest.append(make_node(1))
    logger.debug("Normalized imported tree", extra={"top_level": len(forest), "ids": len(seen)})
    return forest


def adopt_title(forest: Forest, title: str | None = None) -> bool:
    """Migrate a legacy forest without a title node by inserting one in front.

    Returns True when the forest was changed.
    """
    if title_node(forest) is not None:
        return False
    text = (title or "").strip() or DEFAULT_OPTION_BY_LEVEL[0]
    forest.insert(0, TitleNode(id=new_node_id(), options=[text]))
    return True


def _is_title_entry(raw: Any) -> bool:
    if not isinstance(raw, dict):
        return False
    level = raw.get("level")
    return isinstance(level, (int, float)) and not isinstance(level, bool) and level == 0


def _coerce_options(raw: Any) -> list[str]:
    options = [_coerce_text(item) for item in raw] if isinstance(raw, list) else []
    return options or [PLACEHOLDER_TITLE]


def _coerce_text(value: Any) -> str:
    # Mirrors how the browser editor stringified option values.
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _coerce_selected(raw: Any, option_count: int) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return 0
    if isinstance(raw, float) and not math.isfinite(raw):
        return 0
    return max(0, min(option_count - 1, int(raw)))


def _truthy(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True
