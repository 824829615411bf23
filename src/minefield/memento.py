"""
Snapshots of board state and the undo stack that holds them.

The board knows how to save and restore itself; the caretaker only keeps
the snapshots in order. Deciding when to take a snapshot is up to the
caller (usually before every player move).
"""
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from .cell import Cell, VisibleCell
from .exceptions import MinefieldError
from .state import GameState

if TYPE_CHECKING:
    from .board import Board

logger = logging.getLogger(__name__)


# ============================================================================
# Memento
# ============================================================================

@dataclass(frozen=True)
class BoardMemento:
    """
    Immutable copy of every field of a board.

    Grids are stored row-major as tuples of frozen cells, so later moves
    on the live board can never change a memento.
    """

    state: GameState
    height: int
    width: int
    initial_mines: int
    mines_remaining: int
    seed: Optional[int]
    cells: Tuple[Tuple[Cell, ...], ...] = field(repr=False)
    visible: Tuple[Tuple[VisibleCell, ...], ...] = field(repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.name,
            "height": self.height,
            "width": self.width,
            "initial_mines": self.initial_mines,
            "mines_remaining": self.mines_remaining,
            "seed": self.seed,
            "cells": [[cell.to_dict() for cell in row] for row in self.cells],
            "visible": [
                [visible.to_dict() for visible in row] for row in self.visible
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoardMemento":
        """
        Rebuild a memento from ``to_dict`` output.

        Raises:
            MinefieldError: If fields are missing or the grids do not
                match the stored dimensions.
        """
        try:
            height = int(data["height"])
            width = int(data["width"])
            cells = tuple(
                tuple(Cell.from_dict(item) for item in row)
                for row in data["cells"]
            )
            visible = tuple(
                tuple(VisibleCell.from_dict(item) for item in row)
                for row in data["visible"]
            )
            memento = cls(
                state=GameState[data["state"]],
                height=height,
                width=width,
                initial_mines=int(data["initial_mines"]),
                mines_remaining=int(data["mines_remaining"]),
                seed=data.get("seed"),
                cells=cells,
                visible=visible,
            )
        except (KeyError, TypeError, ValueError) as error:
            raise MinefieldError(f"Invalid board data: {error}") from error

        for grid in (memento.cells, memento.visible):
            if len(grid) != height or any(len(row) != width for row in grid):
                raise MinefieldError(
                    f"Grid does not match the {height}x{width} board"
                )
        return memento


def capture(board: "Board") -> BoardMemento:
    """Take a snapshot of a board."""
    return board.save_memento()


def restore(board: "Board", memento: BoardMemento) -> None:
    """Replace all of a board's state with a snapshot."""
    board.restore_memento(memento)


# ============================================================================
# Caretaker
# ============================================================================

class Caretaker:
    """Last-in-first-out stack of board snapshots."""

    def __init__(self) -> None:
        self._mementos: List[BoardMemento] = []

    def push(self, memento: BoardMemento) -> None:
        self._mementos.append(memento)

    def pop_latest(self) -> Optional[BoardMemento]:
        """Remove and return the newest snapshot, or None if there is none."""
        if not self._mementos:
            return None
        return self._mementos.pop()

    def save(self, board: "Board") -> None:
        """Capture the board and push the snapshot."""
        self.push(capture(board))

    def undo(self, board: "Board") -> bool:
        """
        Restore the board to the newest snapshot.

        Returns:
            True if a snapshot was restored, False if the stack was empty.
        """
        memento = self.pop_latest()
        if memento is None:
            return False
        restore(board, memento)
        logger.debug(
            "Restored board to %s, %d snapshots left",
            memento.state.name, len(self._mementos),
        )
        return True

    def clear(self) -> None:
        self._mementos.clear()

    def __len__(self) -> int:
        return len(self._mementos)
