"""
Signed grid coordinates and the Moore neighbourhood.
"""
from typing import Iterator, NamedTuple, Tuple


class Position(NamedTuple):
    """A column/row coordinate that may lie off the board."""

    x: int
    y: int

    def offset(self, other: "Position") -> "Position":
        """Return this position moved by ``other``."""
        return Position(self.x + other.x, self.y + other.y)


# Clockwise from the top-left corner.
ADJACENT_OFFSETS: Tuple[Position, ...] = (
    Position(-1, -1),
    Position(0, -1),
    Position(1, -1),
    Position(1, 0),
    Position(1, 1),
    Position(0, 1),
    Position(-1, 1),
    Position(-1, 0),
)


def is_within(position: Position, width: int, height: int) -> bool:
    """Check if position is within board bounds."""
    return 0 <= position.x < width and 0 <= position.y < height


def neighbors(x: int, y: int, width: int, height: int) -> Iterator[Position]:
    """
    Iterate over the in-bounds neighbours of a cell.

    Args:
        x: Column of the centre cell.
        y: Row of the centre cell.
        width: Number of columns on the board.
        height: Number of rows on the board.

    Yields:
        Positions in ``ADJACENT_OFFSETS`` order, skipping off-board ones.
    """
    center = Position(x, y)
    for delta in ADJACENT_OFFSETS:
        candidate = center.offset(delta)
        if is_within(candidate, width, height):
            yield candidate
