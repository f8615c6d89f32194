"""The eight directions a word can run in."""

from typing import Dict, Optional, Tuple

from .models import Coordinate, Direction


DIRECTIONS: Tuple[Direction, ...] = (
    Direction(0, 1),    # right
    Direction(1, 0),    # down
    Direction(1, 1),    # diagonal down-right
    Direction(-1, 1),   # diagonal up-right
    Direction(0, -1),   # left
    Direction(-1, 0),   # up
    Direction(-1, -1),  # diagonal up-left
    Direction(1, -1),   # diagonal down-left
)

DIRECTION_NAMES: Dict[Direction, str] = {
    Direction(0, 1): "E",
    Direction(1, 1): "SE",
    Direction(1, 0): "S",
    Direction(1, -1): "SW",
    Direction(0, -1): "W",
    Direction(-1, -1): "NW",
    Direction(-1, 0): "N",
    Direction(-1, 1): "NE",
}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def direction_between(start: Coordinate, end: Coordinate) -> Optional[Direction]:
    """
    Get the unit direction from start to end.

    Returns None when the two cells are identical or do not lie on a
    horizontal, vertical or 45 degree diagonal line.
    """
    dx = end.x - start.x
    dy = end.y - start.y

    if dx == 0 and dy == 0:
        return None

    if dy == 0 or dx == 0 or abs(dx) == abs(dy):
        return Direction(_sign(dy), _sign(dx))

    return None


def direction_name(direction: Direction) -> str:
    """Compass name of a direction (e.g. 'NE')."""
    return DIRECTION_NAMES[direction]
