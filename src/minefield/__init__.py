"""
Minesweeper game engine.

Provides board management, cell state, snapshot-based undo and a
Gymnasium environment wrapper.
"""
from .cell import Cell, CellKind, CellState, VisibleCell
from .position import ADJACENT_OFFSETS, Position
from .state import FinishedState, GameState
from .exceptions import BoardConfigError, MinefieldError, PositionError
from .board import (
    Board,
    BoardConfig,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    dumps,
    loads,
)
from .builder import BoardBuilder, new_board
from .memento import BoardMemento, Caretaker, capture, restore
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellKind",
    "CellState",
    "VisibleCell",
    "Position",
    "ADJACENT_OFFSETS",
    "GameState",
    "FinishedState",
    "MinefieldError",
    "BoardConfigError",
    "PositionError",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "dumps",
    "loads",
    "BoardBuilder",
    "new_board",
    "BoardMemento",
    "Caretaker",
    "capture",
    "restore",
    "MinesweeperEnv",
    "make_vec_env",
]
