"""
Cell module for Minesweeper game.

Separates what a grid coordinate holds (mine, clue or empty) from what
the player can see of it (covered, flagged or uncovered).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .exceptions import MinefieldError


MAX_CLUE = 8


# ============================================================================
# Constants
# ============================================================================

class CellKind(Enum):
    """Ground-truth content of a cell."""

    MINE = auto()
    CLUE = auto()
    EMPTY = auto()


class CellState(Enum):
    """Possible visual states of a cell."""

    COVERED = auto()
    FLAGGED = auto()
    UNCOVERED = auto()


# ============================================================================
# Ground Truth
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Represents the content of a single cell in the Minesweeper grid.

    Attributes:
        kind: Whether the cell is a mine, a clue or empty.
        count: Number of neighbouring mines (1-8 for clues, else 0).
    """

    kind: CellKind = CellKind.EMPTY
    count: int = 0

    def __post_init__(self) -> None:
        """Validate the clue count against the cell kind."""
        if self.kind == CellKind.CLUE:
            if not 1 <= self.count <= MAX_CLUE:
                raise ValueError(
                    f"Clue count must be between 1 and {MAX_CLUE}, "
                    f"got {self.count}"
                )
        elif self.count != 0:
            raise ValueError(f"{self.kind.name} cell cannot carry a count")

    @classmethod
    def mine(cls) -> "Cell":
        return cls(CellKind.MINE)

    @classmethod
    def empty(cls) -> "Cell":
        return cls(CellKind.EMPTY)

    @classmethod
    def clue(cls, count: int) -> "Cell":
        return cls(CellKind.CLUE, count)

    @classmethod
    def from_count(cls, count: int) -> "Cell":
        """Build the non-mine cell for a neighbouring mine count."""
        if count == 0:
            return cls.empty()
        return cls.clue(count)

    @property
    def is_mine(self) -> bool:
        return self.kind == CellKind.MINE

    @property
    def is_clue(self) -> bool:
        return self.kind == CellKind.CLUE

    @property
    def is_empty(self) -> bool:
        return self.kind == CellKind.EMPTY

    @property
    def adjacent_mines(self) -> int:
        """Count of mines in neighbouring cells (0 for mines and empties)."""
        return self.count

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.name, "count": self.count}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cell":
        try:
            return cls(CellKind[data["kind"]], int(data.get("count", 0)))
        except (KeyError, TypeError, ValueError) as error:
            raise MinefieldError(f"Invalid cell data {data!r}") from error


# ============================================================================
# Player View
# ============================================================================

@dataclass(frozen=True)
class VisibleCell:
    """
    What the player sees of a single cell.

    Attributes:
        state: Covered, flagged or uncovered.
        cell: Copy of the ground truth taken when the cell was uncovered.
    """

    state: CellState = CellState.COVERED
    cell: Optional[Cell] = None

    def __post_init__(self) -> None:
        """Only uncovered cells carry their content."""
        if (self.state == CellState.UNCOVERED) != (self.cell is not None):
            raise ValueError(
                "Uncovered cells must carry a cell and other states must not"
            )

    @classmethod
    def covered(cls) -> "VisibleCell":
        return cls(CellState.COVERED)

    @classmethod
    def flagged(cls) -> "VisibleCell":
        return cls(CellState.FLAGGED)

    @classmethod
    def uncovered(cls, cell: Cell) -> "VisibleCell":
        return cls(CellState.UNCOVERED, cell)

    @property
    def is_covered(self) -> bool:
        """Check if cell is covered."""
        return self.state == CellState.COVERED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_uncovered(self) -> bool:
        """Check if cell is uncovered."""
        return self.state == CellState.UNCOVERED

    def to_observation(self) -> int:
        """
        Convert cell to an integer code for renderers and agents.

        Returns:
            -1: Covered cell
            -2: Flagged cell
            0-8: Uncovered cell with adjacent mine count
            9: Uncovered mine (game over state)
        """
        if self.state == CellState.COVERED:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.cell.is_mine:
            return 9
        return self.cell.adjacent_mines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.name,
            "cell": self.cell.to_dict() if self.cell is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VisibleCell":
        try:
            state = CellState[data["state"]]
            raw_cell = data.get("cell")
            cell = Cell.from_dict(raw_cell) if raw_cell is not None else None
            return cls(state, cell)
        except (KeyError, TypeError, ValueError) as error:
            raise MinefieldError(
                f"Invalid visible cell data {data!r}"
            ) from error
