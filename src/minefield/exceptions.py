"""
Exception types raised by the Minefield engine.

Only configuration problems and out-of-range coordinates are errors.
Acting on a finished game or on a flagged cell is a silent no-op.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class BoardConfigError(MinefieldError, ValueError):
    """Raised when a board cannot be built with the requested settings."""


class PositionError(MinefieldError, IndexError):
    """Raised when a coordinate lies outside the board."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Position ({x}, {y}) is outside the {width}x{height} board"
        )
        self.x = x
        self.y = y
