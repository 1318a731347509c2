"""The outline editing session: single owner of the forest and the drag slot."""

from __future__ import annotations

from typing import Any, Callable

from tocideator import mutations
from tocideator.dragdrop import DragDropController
from tocideator.markdown import to_markdown
from tocideator.normalizer import normalize_imported_tree
from tocideator.numbering import PreviewRow, number_outline
from tocideator.schemas import Forest
from tocideator.snapshot import build_export_payload, export_json
from tocideator.tree import default_forest
from tocideator.utils.logging_config import get_logger

logger = get_logger(__name__)

ChangeListener = Callable[[Forest], None]


class OutlineSession:
    """Owns one outline forest and routes every edit through it.

    The forest list keeps its identity for the life of the session; imports
    and resets replace its contents in place, so the drag controller and any
    caller holding ``session.forest`` never see a stale list. Listeners run
    after each edit that changed something (autosave hooks in here).
    """

    def __init__(self, forest: Forest | None = None) -> None:
        self._forest: Forest = list(forest) if forest else default_forest()
        self._listeners: list[ChangeListener] = []
        self.drag = DragDropController(self._forest)

    @property
    def forest(self) -> Forest:
        return self._forest

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unregisters it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _changed(self, result: Any) -> Any:
        if result:
            for listener in list(self._listeners):
                listener(self._forest)
        return result

    # Structure

    def add_sibling(self, node_id: str) -> str | None:
        return self._changed(mutations.add_sibling(self._forest, node_id))

    def add_child(self, node_id: str) -> str | None:
        return self._changed(mutations.add_child(self._forest, node_id))

    def add_root(self) -> str:
        return self._changed(mutations.add_root(self._forest))

    def delete(self, node_id: str) -> bool:
        return self._changed(mutations.delete_node(self._forest, node_id))

    def toggle_collapsed(self, node_id: str) -> bool:
        return self._changed(mutations.toggle_collapsed(self._forest, node_id))

    # Candidate titles

    def set_selected(self, node_id: str, index: int) -> bool:
        return self._changed(mutations.set_selected(self._forest, node_id, index))

    def add_option(self, node_id: str, text: str) -> bool:
        return self._changed(mutations.add_option(self._forest, node_id, text))

    def edit_option(self, node_id: str, index: int, text: str) -> bool:
        return self._changed(mutations.edit_option(self._forest, node_id, index, text))

    def remove_option(self, node_id: str, index: int) -> bool:
        return self._changed(mutations.remove_option(self._forest, node_id, index))

    # Drag and drop

    def drop(self) -> bool:
        """Commit the armed drag through the controller."""
        return self._changed(self.drag.drop())

    # Whole-tree operations

    def reset(self) -> None:
        self.drag.cancel()
        self._forest[:] = default_forest()
        logger.info("Outline reset")
        self._changed(True)

    def import_tree(self, value: Any, confirm: Callable[[], bool]) -> bool:
        """Replace the outline with an imported one after the user confirms.

        The input is normalized before asking, so a malformed document raises
        ``ValidationError`` with the current outline untouched. Returns False
        when the user declines.
        """
        normalized = normalize_imported_tree(value)
        if not confirm():
            logger.info("Import declined")
            return False
        self.drag.cancel()
        self._forest[:] = normalized
        logger.info("Outline imported", extra={"top_level": len(normalized)})
        return self._changed(True)

    # Projections

    def numbering(self) -> list[PreviewRow]:
        return number_outline(self._forest)

    def markdown(self) -> str:
        return to_markdown(self._forest)

    def export_payload(self) -> dict[str, Any]:
        return build_export_payload(self._forest)

    def export_json(self) -> str:
        return export_json(self._forest)
