"""
Validated construction of boards.
"""
from typing import Optional

from .board import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    Board,
    BoardConfig,
    RandomSource,
)

__all__ = [
    "BoardBuilder",
    "BoardConfig",
    "new_board",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
]


class BoardBuilder:
    """
    Collects board settings and builds a validated board.

    Example:
        board = BoardBuilder(3, 3, 2).set_seed(1).build()
    """

    def __init__(self, height: int, width: int, mines: int) -> None:
        self.height = height
        self.width = width
        self.mines = mines
        self.seed: Optional[int] = None
        self.rng: Optional[RandomSource] = None

    def set_seed(self, seed: int) -> "BoardBuilder":
        """Make mine placement deterministic."""
        self.seed = seed
        return self

    def set_rng(self, rng: RandomSource) -> "BoardBuilder":
        """Use a custom random source for mine placement."""
        self.rng = rng
        return self

    def build(self) -> Board:
        """
        Build the board.

        Raises:
            BoardConfigError: If the mine count does not fit the board.
        """
        config = BoardConfig(self.height, self.width, self.mines)
        return Board(config, seed=self.seed, rng=self.rng)


def new_board(
    height: int, width: int, mines: int, seed: Optional[int] = None
) -> Board:
    """Build a validated board in one call."""
    builder = BoardBuilder(height, width, mines)
    if seed is not None:
        builder.set_seed(seed)
    return builder.build()
