"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardBuilder, BoardConfig, Cell, VisibleCell


# ============================================================================
# Deterministic Mine Layouts
# ============================================================================

class ScriptedRandom:
    """Random source that replays fixed draws, giving exact mine layouts."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values: List[int] = list(values)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        value = self.values[self.calls]
        self.calls += 1
        assert 0 <= value < stop
        return value

    @property
    def exhausted(self) -> bool:
        return self.calls == len(self.values)


def scripted(*positions: Tuple[int, int]) -> ScriptedRandom:
    """Build a source whose draws land on the given (x, y) positions."""
    return ScriptedRandom(value for position in positions for value in position)


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRandom]:
    """Factory for random sources landing on the given (x, y) positions."""
    return scripted


@pytest.fixture
def make_scripted_board() -> Callable[..., Board]:
    """Factory for boards whose mines land on the given (x, y) positions."""
    def make(
        height: int, width: int, *positions: Tuple[int, int]
    ) -> Board:
        return (
            BoardBuilder(height, width, len(positions))
            .set_rng(scripted(*positions))
            .build()
        )
    return make


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board()


@pytest.fixture
def seeded_board() -> Board:
    """Create a default board with deterministic mine placement."""
    return Board(seed=7)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for flood fill testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def winnable_board(make_scripted_board) -> Board:
    """
    3x3 board with mines at (2, 0) and (2, 2).

        . 1 *
        . 2 2
        . 1 *

    Revealing (0, 0) then (2, 1) wins.
    """
    return make_scripted_board(3, 3, (2, 0), (2, 2))


@pytest.fixture
def losing_board(make_scripted_board) -> Board:
    """
    3x3 board with mines at (2, 0) and (1, 2).

        . 1 *
        1 2 2
        1 * 1

    Revealing (0, 0) then (1, 2) loses.
    """
    return make_scripted_board(3, 3, (2, 0), (1, 2))


@pytest.fixture
def strip_board(make_scripted_board) -> Board:
    """
    Single-row board with one mine splitting two empty regions.

        . . 1 * 1 . .
    """
    return make_scripted_board(1, 7, (3, 0))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell.mine()


@pytest.fixture
def covered_cell() -> VisibleCell:
    """Create a covered cell."""
    return VisibleCell.covered()


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
