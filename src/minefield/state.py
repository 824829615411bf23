"""
Game lifecycle states.
"""
from enum import Enum, auto
from typing import Optional


class FinishedState(Enum):
    """Outcome of a finished game."""

    WON = auto()
    LOST = auto()


class GameState(Enum):
    """
    Possible states of the game.

    ``NEW`` lasts until the first reveal places the mines. ``WON`` and
    ``LOST`` are terminal: no further move changes the board.
    """

    NEW = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_finished(self) -> bool:
        """Check if the game has ended."""
        return self in (GameState.WON, GameState.LOST)

    @property
    def finished_state(self) -> Optional[FinishedState]:
        """Get the outcome, or None while the game is still open."""
        if self is GameState.WON:
            return FinishedState.WON
        if self is GameState.LOST:
            return FinishedState.LOST
        return None
