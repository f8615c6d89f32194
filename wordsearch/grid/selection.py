"""
Selection validation.

Turns the coordinates of a player's drag into a candidate word and checks it
against the active word list. Only straight lines are accepted: horizontal,
vertical, or a perfect 45 degree diagonal, stepping one cell at a time.
"""

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .directions import direction_between
from .models import Coordinate, Grid, SelectionOutcome


MIN_WORD_LENGTH = 3


def as_coordinate(point: Any) -> Coordinate:
    """Accept a Coordinate, an (x, y) pair or an {'x': .., 'y': ..} mapping."""
    if isinstance(point, Coordinate):
        return point
    if isinstance(point, Mapping):
        return Coordinate(int(point["x"]), int(point["y"]))
    x, y = point
    return Coordinate(int(x), int(y))


def in_bounds(grid: Grid, cell: Coordinate) -> bool:
    """Check a coordinate lies inside the grid."""
    return 0 <= cell.y < len(grid) and 0 <= cell.x < len(grid[cell.y])


def selection_path(start: Coordinate, end: Coordinate) -> List[Coordinate]:
    """
    List every cell on the straight line from start to end, inclusive.

    Lines that are not horizontal, vertical or exactly diagonal collapse to
    just the start cell, matching how the drag preview behaves.
    """
    direction = direction_between(start, end)
    if direction is None:
        return [start]

    d_row, d_col = direction
    length = max(abs(end.x - start.x), abs(end.y - start.y))
    return [Coordinate(start.x + d_col * i, start.y + d_row * i) for i in range(length + 1)]


def snap_endpoint(start: Coordinate, current: Coordinate, grid_size: int) -> Coordinate:
    """
    Snap the pointer cell of a live drag onto the nearest allowed line.

    The dominant axis wins: a mostly horizontal drag snaps to the start row,
    a mostly vertical one to the start column, and an exact diagonal is kept.
    Snapped cells that fall outside the grid collapse back to the start.
    """
    dx = current.x - start.x
    dy = current.y - start.y

    if dx == 0 and dy == 0:
        return start

    if abs(dx) == abs(dy):
        snapped = current
    elif abs(dx) > abs(dy):
        snapped = Coordinate(current.x, start.y)
    else:
        snapped = Coordinate(start.x, current.y)

    if 0 <= snapped.x < grid_size and 0 <= snapped.y < grid_size:
        return snapped
    return start


def extract_word(grid: Grid, cells: Sequence[Coordinate]) -> str:
    """Read the letters under a sequence of cells."""
    return "".join(grid[cell.y][cell.x] for cell in cells)


def match_word(candidate: str, words: Sequence[str]) -> Tuple[Optional[str], bool]:
    """
    Compare a candidate against the word list, forward then backward.

    Returns:
        Tuple of (canonical word as listed or None, whether it matched reversed)
    """
    upper_words = [w.upper() for w in words]
    upper_candidate = candidate.upper()

    if upper_candidate in upper_words:
        return words[upper_words.index(upper_candidate)], False

    reversed_candidate = upper_candidate[::-1]
    if reversed_candidate in upper_words:
        return words[upper_words.index(reversed_candidate)], True

    return None, False


def check_selection(grid: Grid, selection: Sequence[Any], words: Sequence[str]) -> SelectionOutcome:
    """
    Check a selection and report why it did or did not match.

    A two-point selection is read as the endpoints of a line. Longer
    selections must list exactly the cells of that line, in order.
    """
    cells = [as_coordinate(p) for p in selection]

    if len(cells) < 2:
        return SelectionOutcome(status="too_short", cells=cells)

    if not grid or any(not in_bounds(grid, cell) for cell in cells):
        return SelectionOutcome(status="out_of_bounds", cells=cells)

    start, end = cells[0], cells[-1]
    if direction_between(start, end) is None:
        return SelectionOutcome(status="invalid_geometry", cells=[start])

    path = selection_path(start, end)
    if len(cells) > 2 and cells != path:
        return SelectionOutcome(status="invalid_geometry", cells=[start])

    candidate = extract_word(grid, path)
    if len(candidate) < MIN_WORD_LENGTH:
        return SelectionOutcome(status="too_short", candidate=candidate, cells=path)

    word, is_reversed = match_word(candidate, words)
    if word is None:
        return SelectionOutcome(status="no_match", candidate=candidate, cells=path)

    return SelectionOutcome(
        status="match",
        word=word,
        candidate=candidate,
        cells=path,
        reversed=is_reversed,
    )


def validate_selection(grid: Grid, selection: Sequence[Any], words: Sequence[str]) -> Optional[str]:
    """
    Validate a drag against the grid and word list.

    Pure function: it never marks anything as found.

    Returns:
        The matched word as it appears in the word list, or None
    """
    return check_selection(grid, selection, words).word
