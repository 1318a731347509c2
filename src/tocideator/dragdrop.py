"""Drag-and-drop move resolution as an explicit state machine.

Pointer events are reduced to four intents: start a drag on a node, hover a
row (with a flag telling whether the pointer is in the row's upper half),
hover the empty canvas, and drop. The controller decides which move mode a
hover arms and commits it through :func:`tocideator.mutations.move_node`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tocideator.exceptions import DragError
from tocideator.mutations import MoveMode, move_node
from tocideator.schemas import Forest
from tocideator.tree import find_context
from tocideator.utils.logging_config import get_logger

logger = get_logger(__name__)


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragState:
    """Current phase plus the dragged node while a drag is active."""

    phase: DragPhase = DragPhase.IDLE
    source_id: str | None = None
    source_level: int | None = None


@dataclass(frozen=True)
class DropIndicator:
    """The armed drop target. ``target_id`` is None for the root canvas."""

    target_id: str | None
    mode: MoveMode


IDLE = DragState()


def resolve_move_mode(
    forest: Forest,
    source_id: str,
    target_id: str,
    *,
    upper_half: bool,
) -> MoveMode | None:
    """Decide which move a hover over ``target_id`` would commit, if any.

    Same level under the same parent reorders (``before`` when the pointer is
    above the row's midpoint, ``after`` otherwise). A target exactly one level
    above the source re-parents (``into``). Everything else is rejected.
    """
    if target_id == source_id:
        return None
    source = find_context(forest, source_id)
    target = find_context(forest, target_id)
    if source is None or target is None or source.node.is_title or target.node.is_title:
        return None
    if target.node.level == source.node.level and target.parent_id == source.parent_id:
        return MoveMode.BEFORE if upper_half else MoveMode.AFTER
    if target.node.level == source.node.level - 1:
        return MoveMode.INTO
    return None


class DragDropController:
    """Holds the single active-drag slot for one outline forest."""

    def __init__(self, forest: Forest) -> None:
        self._forest = forest
        self._state = IDLE
        self._indicator: DropIndicator | None = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def indicator(self) -> DropIndicator | None:
        return self._indicator

    @property
    def is_dragging(self) -> bool:
        return self._state.phase is DragPhase.DRAGGING

    def start(self, source_id: str) -> bool:
        """Begin dragging ``source_id``. The title node cannot be dragged."""
        if self.is_dragging:
            raise DragError(f"drag of {self._state.source_id!r} is already active")
        ctx = find_context(self._forest, source_id)
        if ctx is None or ctx.node.is_title:
            return False
        self._state = DragState(DragPhase.DRAGGING, source_id, ctx.node.level)
        self._indicator = None
        return True

    def hover(self, target_id: str, *, upper_half: bool) -> MoveMode | None:
        """Arm the move for the row under the pointer, or clear the indicator."""
        if not self.is_dragging:
            return None
        mode = resolve_move_mode(
            self._forest, self._state.source_id, target_id, upper_half=upper_half
        )
        if mode is None:
            # Hovering the dragged row itself leaves the current indicator alone.
            if target_id != self._state.source_id:
                self._indicator = None
            return None
        self._indicator = DropIndicator(target_id, mode)
        return mode

    def hover_canvas(self) -> MoveMode | None:
        """Pointer is over empty canvas: chapters may be moved to the end."""
        if not self.is_dragging:
            return None
        if self._state.source_level != 1:
            self._indicator = None
            return None
        self._indicator = DropIndicator(None, MoveMode.ROOT_END)
        return MoveMode.ROOT_END

    def leave(self, target_id: str | None = None) -> None:
        """Pointer left a row (or the canvas when ``target_id`` is None)."""
        if self._indicator is not None and self._indicator.target_id == target_id:
            self._indicator = None

    def drop(self) -> bool:
        """Commit the armed move and return to idle. Mismatches change nothing."""
        if not self.is_dragging:
            return False
        source_id = self._state.source_id
        indicator = self._indicator
        self._reset()
        if indicator is None:
            return False
        moved = move_node(self._forest, source_id, indicator.target_id, indicator.mode)
        if not moved:
            logger.debug(
                "Drop rejected",
                extra={"source_id": source_id, "target_id": indicator.target_id, "mode": indicator.mode.value},
            )
        return moved

    def cancel(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._state = IDLE
        self._indicator = None
