"""
Board module for Minesweeper game.

Implements the game board with mine placement, clue computation,
cell revealing, flagging and game state management.
"""
import json
import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Set, Tuple

import numpy as np

from .cell import Cell, VisibleCell
from .exceptions import BoardConfigError, PositionError
from .memento import BoardMemento
from .position import Position, is_within, neighbors
from .state import GameState

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Cells that must stay mine-free besides the mines: the clicked cell and
# a guaranteed minimum clearance around it.
RESERVED_CELLS = 3


class RandomSource(Protocol):
    """Subset of ``random.Random`` used for mine placement."""

    def randrange(self, stop: int) -> int:
        ...


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        height: Number of rows.
        width: Number of columns.
        num_mines: Total mines to place.
    """

    height: int = 9
    width: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise BoardConfigError(
                f"Board dimensions must be positive, "
                f"got {self.height}x{self.width}"
            )
        if self.num_mines < 0:
            raise BoardConfigError("Number of mines cannot be negative")
        if self.num_mines > self.max_mines:
            raise BoardConfigError(
                f"Too many mines for a {self.height}x{self.width} board: "
                f"{self.num_mines} requested (max {self.max_mines})"
            )

    @property
    def area(self) -> int:
        return self.height * self.width

    @property
    def max_mines(self) -> int:
        """Largest mine count that still leaves room for a first click."""
        return max(0, self.area - RESERVED_CELLS)


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns two same-shaped row-major grids: the ground truth (``Cell``) and
    the player's view of it (``VisibleCell``). Mines are placed on the
    first reveal, away from the clicked cell.

    Coordinates are ``(x, y)`` with ``x`` the column and ``y`` the row.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    seed: Optional[int] = None
    rng: Optional[RandomSource] = field(default=None, repr=False, compare=False)
    _cells: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _visible: List[List[VisibleCell]] = field(
        default_factory=list, init=False, repr=False
    )
    _state: GameState = field(default=GameState.NEW, init=False)
    _mines_remaining: int = field(default=0, init=False)
    _random: RandomSource = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Initialize the grids after dataclass creation."""
        self.reset()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a covered grid of empty cells."""
        self._cells = [
            [Cell.empty() for _ in range(self.width)]
            for _ in range(self.height)
        ]
        self._visible = [
            [VisibleCell.covered() for _ in range(self.width)]
            for _ in range(self.height)
        ]

    def _make_random(self) -> RandomSource:
        if self.rng is not None:
            return self.rng
        return random.Random(self.seed)

    def _place_mines(self, x: int, y: int) -> None:
        """
        Place mines by rejection sampling, sparing the first click.

        Args:
            x: Column of the first revealed cell.
            y: Row of the first revealed cell.
        """
        exclude = self._safe_zone(x, y)
        placed = 0
        while placed < self.config.num_mines:
            candidate = Position(
                self._random.randrange(self.width),
                self._random.randrange(self.height),
            )
            if candidate in exclude or self._cells[candidate.y][candidate.x].is_mine:
                continue
            self._cells[candidate.y][candidate.x] = Cell.mine()
            placed += 1
        logger.debug(
            "Placed %d mines on %dx%d board, first click at (%d, %d)",
            placed, self.height, self.width, x, y,
        )

    def _safe_zone(self, x: int, y: int) -> Set[Position]:
        """Get the positions that must stay mine-free on the first click."""
        zone = {Position(x, y)}
        zone.update(self._neighbors(x, y))
        if self.config.area - len(zone) < self.config.num_mines:
            # Too dense for a full safe zone: only the clicked cell is spared.
            return {Position(x, y)}
        return zone

    def _calculate_clues(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for y in range(self.height):
            for x in range(self.width):
                if not self._cells[y][x].is_mine:
                    count = self._count_adjacent_mines(x, y)
                    self._cells[y][x] = Cell.from_count(count)

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for neighbor in self._neighbors(x, y)
            if self._cells[neighbor.y][neighbor.x].is_mine
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _neighbors(self, x: int, y: int) -> List[Position]:
        return list(neighbors(x, y, self.width, self.height))

    def _check_position(self, x: int, y: int) -> None:
        if not is_within(Position(x, y), self.width, self.height):
            raise PositionError(x, y, self.width, self.height)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal a cell at the given position.

        On first click, places mines avoiding this cell and its
        neighbours. If the cell is empty (0 adjacent mines), the whole
        connected empty region and its clue border are revealed. If the
        cell is a mine, the game is lost.

        Args:
            x: Column to reveal.
            y: Row to reveal.

        Returns:
            True if any cell was uncovered, False if the move was a no-op.

        Raises:
            PositionError: If the coordinate is outside the board.
        """
        self._check_position(x, y)

        if self._state == GameState.NEW:
            self._handle_first_click(x, y)
        elif self._state != GameState.PLAYING:
            return False

        visible = self._visible[y][x]
        if visible.is_flagged or visible.is_uncovered:
            return False

        self._uncover(x, y)
        cell = self._cells[y][x]

        if cell.is_mine:
            self._finish(GameState.LOST)
            return True

        if cell.is_empty:
            self._flood_fill(x, y)

        if self._all_safe_cells_uncovered():
            self._finish(GameState.WON)
        return True

    def _handle_first_click(self, x: int, y: int) -> None:
        """Handle first click: place mines and calculate clues."""
        self._place_mines(x, y)
        self._calculate_clues()
        self._state = GameState.PLAYING

    def _uncover(self, x: int, y: int) -> None:
        """Uncover a single cell, returning any flag on it to the budget."""
        if self._visible[y][x].is_flagged:
            self._mines_remaining += 1
        self._visible[y][x] = VisibleCell.uncovered(self._cells[y][x])

    def _flood_fill(self, x: int, y: int) -> None:
        """Uncover everything reachable through empty cells from (x, y)."""
        pending = deque([Position(x, y)])
        while pending:
            current = pending.popleft()
            for neighbor in self._neighbors(current.x, current.y):
                if self._visible[neighbor.y][neighbor.x].is_uncovered:
                    continue
                self._uncover(neighbor.x, neighbor.y)
                if self._cells[neighbor.y][neighbor.x].is_empty:
                    pending.append(neighbor)

    def _all_safe_cells_uncovered(self) -> bool:
        """Check if all non-mine cells are uncovered."""
        for y in range(self.height):
            for x in range(self.width):
                if self._cells[y][x].is_mine:
                    continue
                if not self._visible[y][x].is_uncovered:
                    return False
        return True

    def _finish(self, state: GameState) -> None:
        self._state = state
        logger.debug("Game finished: %s", state.name)

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Flags can only be placed while the game is in progress and the
        flag budget is not exhausted.

        Args:
            x: Column.
            y: Row.

        Returns:
            True if flag was toggled, False otherwise.

        Raises:
            PositionError: If the coordinate is outside the board.
        """
        self._check_position(x, y)
        if self._state != GameState.PLAYING:
            return False

        visible = self._visible[y][x]
        if visible.is_covered and self._mines_remaining > 0:
            self._visible[y][x] = VisibleCell.flagged()
            self._mines_remaining -= 1
            return True
        if visible.is_flagged:
            self._visible[y][x] = VisibleCell.covered()
            self._mines_remaining += 1
            return True
        return False

    def reset(self) -> None:
        """Reset board to the state of a freshly built one."""
        self._random = self._make_random()
        self._init_grid()
        self._state = GameState.NEW
        self._mines_remaining = self.config.num_mines

    # ========================================================================
    # Snapshots
    # ========================================================================

    def save_memento(self) -> BoardMemento:
        """Capture an independent copy of every board field."""
        return BoardMemento(
            state=self._state,
            height=self.height,
            width=self.width,
            initial_mines=self.initial_mines,
            mines_remaining=self._mines_remaining,
            seed=self.seed,
            cells=tuple(tuple(row) for row in self._cells),
            visible=tuple(tuple(row) for row in self._visible),
        )

    def restore_memento(self, memento: BoardMemento) -> None:
        """Overwrite every board field with the captured values."""
        self.config = BoardConfig(
            memento.height, memento.width, memento.initial_mines
        )
        self.seed = memento.seed
        self._state = memento.state
        self._mines_remaining = memento.mines_remaining
        self._cells = [list(row) for row in memento.cells]
        self._visible = [list(row) for row in memento.visible]

    def to_dict(self) -> Dict[str, Any]:
        """Get the whole board state as JSON-serialisable data."""
        return self.save_memento().to_dict()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Board":
        """Rebuild a board saved with ``to_dict``."""
        memento = BoardMemento.from_dict(data)
        board = cls(
            BoardConfig(memento.height, memento.width, memento.initial_mines),
            seed=memento.seed,
        )
        board.restore_memento(memento)
        return board

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def initial_mines(self) -> int:
        """Number of mines on the board once they are placed."""
        return self.config.num_mines

    @property
    def mines_remaining(self) -> int:
        """Number of flags the player may still place."""
        return self._mines_remaining

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        """Check if game is open (not yet started or in progress)."""
        return not self._state.is_finished

    @property
    def is_finished(self) -> bool:
        return self._state.is_finished

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._state == GameState.LOST

    def get_cell(self, x: int, y: int) -> Cell:
        """Get the ground truth at a position."""
        self._check_position(x, y)
        return self._cells[y][x]

    def get_visible_cell(self, x: int, y: int) -> VisibleCell:
        """Get what the player sees at a position."""
        self._check_position(x, y)
        return self._visible[y][x]

    def count_uncovered(self) -> int:
        return sum(
            1 for row in self._visible for visible in row
            if visible.is_uncovered
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for renderers and agents.

        Returns:
            2D numpy array indexed ``[y, x]`` where:
                -1 = covered
                -2 = flagged
                0-8 = uncovered with adjacent count
                9 = uncovered mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for y in range(self.height):
            for x in range(self.width):
                obs[y, x] = self._visible[y][x].to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of covered cells that can still be revealed.

        Returns:
            List of (x, y) positions.
        """
        actions = []
        for y in range(self.height):
            for x in range(self.width):
                if self._visible[y][x].is_covered:
                    actions.append((x, y))
        return actions


# ============================================================================
# Persistence
# ============================================================================

def dumps(board: Board) -> str:
    """Serialize a board to a JSON string."""
    return json.dumps(board.to_dict())


def loads(text: str) -> Board:
    """Rebuild a board from a string produced by ``dumps``."""
    return Board.from_dict(json.loads(text))
